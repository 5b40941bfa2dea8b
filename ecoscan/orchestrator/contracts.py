import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

Classification = Literal["reusable", "recyclable", "non-recyclable"]

CLASSIFICATIONS = ("reusable", "recyclable", "non-recyclable")
DEFAULT_CLASSIFICATION = "non-recyclable"
UNKNOWN_RATING = "Unknown"

IMPACT_KEYS = ("carbonFootprint", "recyclability", "biodegradability")
LIST_KEYS = ("materials", "disposalTips", "reuseSuggestions", "educationalFacts")

ANALYZE_PATH = "/api/analyze-image"


def new_id() -> str:
    return uuid.uuid4().hex


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class EnvironmentalImpact:
    carbon_footprint: str = UNKNOWN_RATING   # e.g. "Very Low" .. "Very High"
    recyclability: str = UNKNOWN_RATING
    biodegradability: str = UNKNOWN_RATING   # may also be "Never"

    def to_dict(self) -> dict:
        return {
            "carbonFootprint": self.carbon_footprint,
            "recyclability": self.recyclability,
            "biodegradability": self.biodegradability,
        }

    @classmethod
    def from_dict(cls, data) -> "EnvironmentalImpact":
        data = data if isinstance(data, dict) else {}

        def rating(key: str) -> str:
            v = data.get(key)
            return v.strip() if isinstance(v, str) and v.strip() else UNKNOWN_RATING

        return cls(
            carbon_footprint=rating("carbonFootprint"),
            recyclability=rating("recyclability"),
            biodegradability=rating("biodegradability"),
        )


@dataclass(frozen=True)
class ScanResult:
    """One classification outcome for one image.

    Built once per analysis attempt, by the request adapter on success or by
    fallback synthesis on failure, and never mutated afterwards. Lists are
    stored as tuples so the record stays immutable.
    """
    id: str
    image: str
    object_name: str
    classification: Classification
    confidence: int
    materials: tuple[str, ...] = ()
    environmental_impact: EnvironmentalImpact = field(default_factory=EnvironmentalImpact)
    disposal_tips: tuple[str, ...] = ()
    reuse_suggestions: tuple[str, ...] = ()
    educational_facts: tuple[str, ...] = ()
    timestamp: str = field(default_factory=now_iso)

    def to_dict(self) -> dict:
        """camelCase form used on the wire and in exported reports."""
        return {
            "id": self.id,
            "image": self.image,
            "objectName": self.object_name,
            "classification": self.classification,
            "confidence": self.confidence,
            "materials": list(self.materials),
            "environmentalImpact": self.environmental_impact.to_dict(),
            "disposalTips": list(self.disposal_tips),
            "reuseSuggestions": list(self.reuse_suggestions),
            "educationalFacts": list(self.educational_facts),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScanResult":
        return cls(
            id=data["id"],
            image=data["image"],
            object_name=data["objectName"],
            classification=data["classification"],
            confidence=data["confidence"],
            materials=tuple(data.get("materials") or ()),
            environmental_impact=EnvironmentalImpact.from_dict(data.get("environmentalImpact")),
            disposal_tips=tuple(data.get("disposalTips") or ()),
            reuse_suggestions=tuple(data.get("reuseSuggestions") or ()),
            educational_facts=tuple(data.get("educationalFacts") or ()),
            timestamp=data["timestamp"],
        )
