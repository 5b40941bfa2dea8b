import base64
import json

import pytest

from ecoscan.adapters.camera.base import CameraAdapter
from ecoscan.client.catalog import FallbackCatalog
from ecoscan.client.images import encode_bytes, encode_file, sniff_media_type
from ecoscan.scripts import scan

PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def test_sniff_media_type():
    assert sniff_media_type(PNG) == "image/png"
    assert sniff_media_type(b"\xff\xd8\xff\xe0rest") == "image/jpeg"
    assert sniff_media_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert sniff_media_type(b"hello") is None


def test_encode_bytes_round_trips():
    uri = encode_bytes(PNG)
    assert uri.startswith("data:image/png;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == PNG


def test_encode_file_prefers_content_over_extension(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(PNG)
    assert encode_file(path).startswith("data:image/png;base64,")


class _FakeCamera(CameraAdapter):
    def __init__(self, frame):
        self.frame = frame

    def capture_bytes(self):
        return self.frame


def test_camera_capture_image():
    assert _FakeCamera(b"\xff\xd8\xffjpeg").capture_image().startswith("data:image/jpeg;base64,")
    assert _FakeCamera(None).capture_image() is None


def test_render_lists_sections():
    result = FallbackCatalog(selector=lambda n: 1).synthesize("data:image/png;base64,AA==")
    text = scan.render(result)
    assert text.startswith("Glass Jar")
    assert "reusable, 98% confidence" in text
    assert "biodegradability=Never" in text
    assert "    - Candle holder" in text


@pytest.fixture
def offline_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ECOSCAN_SERVICE_URL", "http://127.0.0.1:9")
    monkeypatch.setenv("ECOSCAN_TIMEOUT", "2")
    return tmp_path


def test_cli_without_images_reports_and_fails(offline_env, capsys):
    with pytest.raises(SystemExit) as exc:
        scan.main([])
    assert exc.value.code == 1
    assert "No image selected" in capsys.readouterr().out


def test_cli_scans_offline_and_exports(offline_env, capsys):
    img = offline_env / "item.png"
    img.write_bytes(PNG)
    with pytest.raises(SystemExit) as exc:
        scan.main([str(img), "--export", str(offline_env / "out"), "--history"])
    assert exc.value.code == 0

    out = capsys.readouterr().out
    assert "History (1)" in out
    reports = list((offline_env / "out").glob("ecoscan-*.json"))
    assert len(reports) == 1
    data = json.loads(reports[0].read_text(encoding="utf-8"))
    assert data["image"].startswith("data:image/png;base64,")
    assert data["classification"] in ("reusable", "recyclable", "non-recyclable")


def test_cli_skips_unreadable_file(offline_env, capsys):
    with pytest.raises(SystemExit) as exc:
        scan.main([str(offline_env / "missing.jpg")])
    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert "[skip]" in out
    assert "No image selected" in out
