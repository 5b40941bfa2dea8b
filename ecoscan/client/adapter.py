"""
Client side of the analysis protocol.

One POST to the analysis service per image; whatever comes back is mapped to
a complete ScanResult. Any failure (connection refused, timeout, non-2xx,
body that isn't a JSON object) is logged and replaced by a result from the
fallback catalog, so request_analysis never raises.
"""
import httpx
from ecoscan.client.catalog import FallbackCatalog
from ecoscan.orchestrator.contracts import (
    ANALYZE_PATH, EnvironmentalImpact, ScanResult, new_id, now_iso,
)
from ecoscan.services.config import Config
from ecoscan.services.normalize import (
    coerce_classification, coerce_confidence, coerce_list, coerce_name,
)
from ecoscan.services.status_store import StatusStore

UNKNOWN_OBJECT = "Unknown Object"
# The service already defaults a bad confidence to 75; if one still arrives
# here it is shown as 0 rather than as a made-up figure.
CLIENT_DEFAULT_CONFIDENCE = 0


class BadResponse(ValueError):
    pass


def result_from_payload(payload: dict, image: str) -> ScanResult:
    return ScanResult(
        id=new_id(),
        image=image,
        object_name=coerce_name(payload.get("objectName"), UNKNOWN_OBJECT),
        classification=coerce_classification(payload.get("classification")),
        confidence=coerce_confidence(payload.get("confidence"), CLIENT_DEFAULT_CONFIDENCE),
        materials=tuple(coerce_list(payload.get("materials"))),
        environmental_impact=EnvironmentalImpact.from_dict(payload.get("environmentalImpact")),
        disposal_tips=tuple(coerce_list(payload.get("disposalTips"))),
        reuse_suggestions=tuple(coerce_list(payload.get("reuseSuggestions"))),
        educational_facts=tuple(coerce_list(payload.get("educationalFacts"))),
        timestamp=now_iso(),
    )


class RequestAdapter:
    def __init__(
        self,
        config: Config,
        status_store: StatusStore | None = None,
        catalog: FallbackCatalog | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self.status = status_store or StatusStore()
        self.catalog = catalog or FallbackCatalog()
        self._client = client
        self.url = f"{config.service_url.rstrip('/')}{ANALYZE_PATH}"

    async def _post(self, image: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.url, json={"image": image})
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            return await client.post(self.url, json={"image": image})

    async def request_analysis(self, image: str) -> ScanResult:
        try:
            self.status.log(f"request_adapter: POST {self.url}")
            resp = await self._post(image)
            if not resp.is_success:
                raise BadResponse(f"HTTP {resp.status_code}: {resp.text[:200]}")
            payload = resp.json()
            if not isinstance(payload, dict):
                raise BadResponse(f"expected a JSON object, got {type(payload).__name__}")
            result = result_from_payload(payload, image)
            self.status.log(f"request_adapter: {result.object_name} ({result.classification})")
            return result
        except Exception as e:
            self.status.last_error = str(e)
            self.status.log(f"request_adapter: analysis failed ({type(e).__name__}: {e}), using fallback")
            result = self.catalog.synthesize(image)
            self.status.log(f"request_adapter: fallback → {result.object_name}")
            return result
