"""
Export helpers for a single ScanResult: JSON report file and share payload.

share() tries a platform share function first and falls back to a clipboard
copy function when sharing is unsupported or fails.
"""
import json
import re
from pathlib import Path
from typing import Callable, Optional
from ecoscan.orchestrator.contracts import ScanResult


def to_json(result: ScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def from_json(text: str) -> ScanResult:
    return ScanResult.from_dict(json.loads(text))


def export_filename(result: ScanResult) -> str:
    # Model-supplied name: keep it to one safe path component
    slug = re.sub(r"[^a-z0-9]+", "-", result.object_name.lower()).strip("-") or result.id
    return f"ecoscan-{slug}.json"


def write_export(result: ScanResult, out_dir: str | Path) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(result)
    path.write_text(to_json(result), encoding="utf-8")
    return path


def share_payload(result: ScanResult, url: str) -> dict:
    return {
        "title": f"EcoScan: {result.object_name}",
        "text": f"Scanned {result.object_name} - Classification: {result.classification}",
        "url": url,
    }


def share(
    result: ScanResult,
    url: str,
    share_fn: Optional[Callable[[dict], None]] = None,
    copy_fn: Optional[Callable[[str], None]] = None,
) -> tuple[str, str]:
    """Deliver the share payload; returns (mode, text).

    mode is "shared" when share_fn accepted the payload, "clipboard" when the
    text went to copy_fn, or "text" when neither is available and the caller
    has to show the text itself.
    """
    payload = share_payload(result, url)
    text = f"{payload['title']}\n{payload['text']}\n{payload['url']}"
    if share_fn is not None:
        try:
            share_fn(payload)
            return "shared", text
        except Exception:
            pass
    if copy_fn is not None:
        copy_fn(text)
        return "clipboard", text
    return "text", text
