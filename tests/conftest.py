import json

import pytest
from fastapi.testclient import TestClient

from ecoscan.adapters.vision.base import VisionAdapter
from ecoscan.orchestrator.errors import UpstreamError
from ecoscan.services.api import create_app
from ecoscan.services.config import Config
from ecoscan.services.status_store import StatusStore

IMAGE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="

GOOD_REPLY = {
    "objectName": "Glass Mason Jar",
    "classification": "reusable",
    "confidence": 97,
    "materials": ["Soda-lime Glass", "Steel Lid"],
    "environmentalImpact": {
        "carbonFootprint": "Low",
        "recyclability": "Very High",
        "biodegradability": "Never",
    },
    "disposalTips": ["Remove the lid", "Rinse", "Recycle glass and metal separately"],
    "reuseSuggestions": ["Pantry storage", "Vase", "Candle holder"],
    "educationalFacts": ["Glass is endlessly recyclable"],
}


class StubVision(VisionAdapter):
    """Returns a fixed reply (or raises) instead of calling a provider."""

    name = "stub"

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[str] = []

    async def classify(self, image: str) -> str:
        self.calls.append(image)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def config():
    return Config(openai_api_key="test-key", vision_adapter="mock", service_url="http://ecoscan.test")


@pytest.fixture
def make_client(config, status):
    """make_client(reply=..., error=...) -> (TestClient, StubVision)"""

    def _make(reply="", error=None):
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        vision = StubVision(reply, error)
        return TestClient(create_app(config, vision=vision, status=status)), vision

    return _make


@pytest.fixture
def upstream_down():
    return UpstreamError("provider unreachable")
