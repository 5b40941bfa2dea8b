ERR_NO_IMAGE = "NO_IMAGE"
ERR_UPSTREAM = "UPSTREAM_FAILURE"

MSG_NO_IMAGE = "No image provided"
MSG_ANALYZE_FAILED = "Failed to analyze image"


class NoImageError(ValueError):
    """Raised client-side when a scan is requested without an image."""

    code = ERR_NO_IMAGE

    def __init__(self, msg: str = MSG_NO_IMAGE):
        super().__init__(msg)


class UpstreamError(RuntimeError):
    """The model provider was unreachable or answered with a non-success status."""

    code = ERR_UPSTREAM

    def __init__(self, msg: str, status_code: int | None = None):
        super().__init__(msg)
        self.status_code = status_code
