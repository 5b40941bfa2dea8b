from ecoscan.services import normalize
from ecoscan.services.status_store import StatusStore


class AnalysisService:
    """Stateless image → normalized payload pipeline around one vision adapter.

    UpstreamError from the adapter propagates; everything after the provider
    call (parse, repair, validate) is local and cannot fail.
    """

    def __init__(self, vision, status_store: StatusStore):
        self.vision = vision
        self.status = status_store

    async def analyze(self, image: str) -> dict:
        self.status.requests += 1
        raw = await self.vision.classify(image)
        payload, repaired = normalize.analyze_reply(raw)
        if repaired:
            self.status.log("analysis: no JSON in model reply, returning repaired payload")
        self.status.last_object = payload["objectName"]
        self.status.log(
            f"analysis: {payload['objectName']} → {payload['classification']} ({payload['confidence']}%)"
        )
        return payload
