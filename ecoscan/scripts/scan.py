"""
Scan images from the command line through the analysis service.

Usage:
    # service running (python -m ecoscan.services.api):
    python -m ecoscan.scripts.scan photo1.jpg photo2.png
    python -m ecoscan.scripts.scan --camera --export reports/
    python -m ecoscan.scripts.scan bottle.jpg --share-url https://example.org/scan

ECOSCAN_SERVICE_URL selects the service (default http://127.0.0.1:8000).
If the service is down every scan still completes with a fallback result.
"""
import argparse
import asyncio
import sys
from ecoscan.client.adapter import RequestAdapter
from ecoscan.client.export import share, write_export
from ecoscan.client.images import encode_file
from ecoscan.client.session import ScanSession
from ecoscan.orchestrator.contracts import ScanResult
from ecoscan.orchestrator.errors import NoImageError
from ecoscan.services.config import Config
from ecoscan.services.status_store import StatusStore

ICONS = {"reusable": "♻ reuse", "recyclable": "♲ recycle", "non-recyclable": "🗑 bin"}


def render(result: ScanResult) -> str:
    imp = result.environmental_impact
    lines = [
        f"{result.object_name} — {ICONS.get(result.classification, result.classification)} "
        f"({result.classification}, {result.confidence}% confidence)",
        f"  materials: {', '.join(result.materials) or '-'}",
        f"  impact: carbon={imp.carbon_footprint} recyclability={imp.recyclability} "
        f"biodegradability={imp.biodegradability}",
    ]
    for title, items in (
        ("disposal", result.disposal_tips),
        ("reuse", result.reuse_suggestions),
        ("facts", result.educational_facts),
    ):
        if items:
            lines.append(f"  {title}:")
            lines.extend(f"    - {item}" for item in items)
    return "\n".join(lines)


def collect_images(args, status) -> list[str | None]:
    images = []
    for path in args.files:
        try:
            images.append(encode_file(path))
        except OSError as e:
            print(f"[skip] {path}: {e}")
    if args.camera:
        from ecoscan.adapters.camera.cv2_camera import CV2Camera
        camera = CV2Camera(status)
        try:
            images.append(camera.capture_image())
        finally:
            camera.release()
    return images


async def run(args) -> int:
    status = StatusStore()
    session = ScanSession(RequestAdapter(Config.from_env(), status))
    images = collect_images(args, status)
    if not images:
        print("No image selected — pass one or more files or --camera")
        return 1

    for image in images:
        try:
            result = await session.scan(image)
        except NoImageError as e:
            print(f"[!] {e}")
            continue
        print(render(result))
        if args.export:
            print(f"  report: {write_export(result, args.export)}")
        if args.share_url:
            mode, text = share(result, args.share_url)
            if mode == "text":
                print(f"  share:\n{text}")
        print()

    if args.history:
        print(f"History ({len(session)})")
        for r in session.history:
            print(f"  {r.timestamp}  {r.object_name}  {r.classification}  {r.confidence}%")
    if args.verbose:
        print("\n".join(status.logs))
    return 0


def main(argv=None):
    p = argparse.ArgumentParser(prog="ecoscan", description="Classify waste items from photos.")
    p.add_argument("files", nargs="*", help="image files to scan")
    p.add_argument("--camera", action="store_true", help="capture one frame from the webcam")
    p.add_argument("--export", metavar="DIR", help="write a JSON report per scan into DIR")
    p.add_argument("--share-url", metavar="URL", help="print a share message pointing at URL")
    p.add_argument("--history", action="store_true", help="list this session's scans at the end")
    p.add_argument("-v", "--verbose", action="store_true", help="dump the client log")
    args = p.parse_args(argv)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
