import json
import random
from ecoscan.adapters.vision.base import VisionAdapter

CANNED_REPLIES = [
    json.dumps({
        "objectName": "Plastic Water Bottle",
        "classification": "recyclable",
        "confidence": 92,
        "materials": ["PET Plastic (#1)", "Polypropylene Cap (#5)"],
        "environmentalImpact": {
            "carbonFootprint": "Medium",
            "recyclability": "High",
            "biodegradability": "Very Low",
        },
        "disposalTips": [
            "Empty and rinse the bottle",
            "Put the cap back on unless your area says otherwise",
            "Place in the plastics recycling bin",
        ],
        "reuseSuggestions": ["Seedling pot", "Refillable water bottle for plants"],
        "educationalFacts": ["PET can be recycled into polyester fabric"],
    }),
    # Model wrapped the JSON in prose, parser has to dig it out
    "Sure! Here is the analysis:\n" + json.dumps({
        "objectName": "Glass Jar",
        "classification": "reusable",
        "confidence": 96,
        "materials": ["Soda-lime Glass", "Steel Lid"],
        "environmentalImpact": {
            "carbonFootprint": "Low",
            "recyclability": "Very High",
            "biodegradability": "Never",
        },
        "disposalTips": ["Remove the lid and recycle it separately"],
        "reuseSuggestions": ["Pantry storage", "Candle holder"],
        "educationalFacts": ["Glass can be recycled endlessly without quality loss"],
    }),
]


class MockVision(VisionAdapter):
    """Offline stand-in for a model provider: ignores the image, returns a canned reply."""

    name = "mock"

    def __init__(self, status_store, replies: list[str] | None = None):
        self.status = status_store
        self.replies = list(replies) if replies is not None else list(CANNED_REPLIES)

    async def classify(self, image: str) -> str:
        raw = random.choice(self.replies)
        self.status.log(f"mock_vision: raw='{raw[:80]}'")
        return raw
