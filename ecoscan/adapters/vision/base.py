class VisionAdapter:
    name = "base"

    async def classify(self, image: str) -> str:
        """Return the model's raw reply text for one encoded image (data URI).

        Raises UpstreamError when the provider is unreachable or answers with
        a non-success status. Parsing the reply is the caller's job.
        """
        raise NotImplementedError
