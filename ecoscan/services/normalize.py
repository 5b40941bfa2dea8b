"""
Parse, repair and validate raw model replies.

Models are asked for bare JSON but frequently wrap it in prose or markdown
fences, or answer in prose only. The pipeline is:

  parse_reply   json.loads, else the first balanced {...} that decodes
  repair        fixed best-effort payload when nothing decodes
  normalize     enforce objectName / classification / confidence and fill
                anything else that is missing

Nothing here raises: every raw string maps to a complete payload.
"""
import json
from ecoscan.orchestrator.contracts import (
    CLASSIFICATIONS, DEFAULT_CLASSIFICATION, IMPACT_KEYS, LIST_KEYS, UNKNOWN_RATING,
)

DEFAULT_OBJECT_NAME = "Detected Item"
DEFAULT_CONFIDENCE = 75
EXCERPT_CHARS = 150


def parse_reply(raw: str) -> dict | None:
    """Return the JSON object in a model reply, or None if there isn't one."""
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        data = None
    if isinstance(data, dict):
        return data

    start = raw.find("{")
    while start != -1:
        end = _balanced_end(raw, start)
        if end is None:
            start = raw.find("{", start + 1)
            continue
        try:
            data = json.loads(raw[start:end + 1])
        except ValueError:
            data = None
        if isinstance(data, dict):
            return data
        start = raw.find("{", start + 1)
    return None


def _balanced_end(text: str, start: int) -> int | None:
    """Index of the brace closing text[start], skipping braces inside strings."""
    depth = 0
    in_str = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def repair(raw: str) -> dict:
    """Best-effort payload for a reply with no usable JSON.

    The last educational fact carries the start of the raw reply so the
    model's prose is still visible to whoever reads the result.
    """
    excerpt = (raw or "")[:EXCERPT_CHARS] + "..."
    return {
        "objectName": DEFAULT_OBJECT_NAME,
        "classification": DEFAULT_CLASSIFICATION,
        "confidence": DEFAULT_CONFIDENCE,
        "materials": ["Unknown Material"],
        "environmentalImpact": {
            "carbonFootprint": "Medium",
            "recyclability": "Medium",
            "biodegradability": "Low",
        },
        "disposalTips": [
            "Check local waste disposal guidelines",
            "Consider if item can be repaired or repurposed",
            "Look for specialized recycling programs",
            "Dispose of responsibly at waste management facility",
        ],
        "reuseSuggestions": [
            "Consider creative repurposing projects",
            "Use for storage or organization",
            "Transform into decorative items",
            "Repurpose for gardening activities",
        ],
        "educationalFacts": [
            "Many items have hidden recycling potential",
            "Proper disposal prevents environmental contamination",
            "Reusing items reduces manufacturing demand",
            excerpt,
        ],
    }


def coerce_confidence(value, default: int = DEFAULT_CONFIDENCE) -> int:
    """Integer percentage in [0, 100]; anything else becomes `default` (no clamping)."""
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        try:
            value = float(value)
        except ValueError:
            return default
    if not isinstance(value, (int, float)) or value != value:  # NaN
        return default
    if value < 0 or value > 100:
        return default
    return int(round(value))


def coerce_classification(value) -> str:
    if isinstance(value, str) and value.strip().lower() in CLASSIFICATIONS:
        return value.strip().lower()
    return DEFAULT_CLASSIFICATION


def coerce_name(value, default: str = DEFAULT_OBJECT_NAME) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def coerce_list(value) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def normalize(data: dict) -> dict:
    """Service-side validation: always returns the full ScanResult subset."""
    impact = data.get("environmentalImpact")
    impact = impact if isinstance(impact, dict) else {}
    out = {
        "objectName": coerce_name(data.get("objectName")),
        "classification": coerce_classification(data.get("classification")),
        "confidence": coerce_confidence(data.get("confidence")),
        "environmentalImpact": {
            key: coerce_name(impact.get(key), UNKNOWN_RATING) for key in IMPACT_KEYS
        },
    }
    for key in LIST_KEYS:
        out[key] = coerce_list(data.get(key))
    return out


def analyze_reply(raw: str) -> tuple[dict, bool]:
    """raw model text -> (normalized payload, repaired?)"""
    data = parse_reply(raw)
    repaired = data is None
    if repaired:
        data = repair(raw)
    return normalize(data), repaired
