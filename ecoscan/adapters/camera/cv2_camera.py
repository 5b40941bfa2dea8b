"""
OpenCV webcam capture for `scan --camera`.
CAMERA_INDEX env var (default 0) selects the device; a few frames are
discarded after opening so auto exposure can settle.
"""
import os
import cv2
from ecoscan.adapters.camera.base import CameraAdapter

WARMUP_FRAMES = 5
JPEG_QUALITY = 90

class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int | None = None):
        self.status = status_store
        self._index = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        self._cap = None

    def _open(self) -> bool:
        if self._cap is not None and self._cap.isOpened():
            return True
        self._cap = cv2.VideoCapture(self._index)
        if not self._cap.isOpened():
            self.status.log(f"cv2_camera: failed to open device {self._index}")
            return False
        for _ in range(WARMUP_FRAMES):
            self._cap.read()
        self.status.log(f"cv2_camera: device {self._index} open")
        return True

    def capture_bytes(self) -> bytes | None:
        if not self._open():
            return None
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
        if not ok:
            self.status.log("cv2_camera: jpeg encode failed")
            return None
        h, w = frame.shape[:2]
        self.status.log(f"cv2_camera: captured {w}x{h}")
        return bytes(buf)

    def release(self):
        if self._cap is not None and self._cap.isOpened():
            self._cap.release()
        self._cap = None
