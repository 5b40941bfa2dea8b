"""Turn uploaded files or captured frames into self-contained data URIs."""
import base64
import mimetypes
from pathlib import Path

_MAGIC = [
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
]


def sniff_media_type(data: bytes) -> str | None:
    for magic, media in _MAGIC:
        if data.startswith(magic):
            return media
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def encode_bytes(data: bytes, media_type: str | None = None) -> str:
    media_type = media_type or sniff_media_type(data) or "image/jpeg"
    b64 = base64.standard_b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{b64}"


def encode_file(path: str | Path) -> str:
    path = Path(path)
    data = path.read_bytes()
    guessed, _ = mimetypes.guess_type(path.name)
    media_type = sniff_media_type(data) or guessed
    return encode_bytes(data, media_type)
