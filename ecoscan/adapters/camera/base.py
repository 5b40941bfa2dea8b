from abc import ABC, abstractmethod
from ecoscan.client.images import encode_bytes

class CameraAdapter(ABC):
    @abstractmethod
    def capture_bytes(self) -> bytes | None:
        """Capture one frame. Returns JPEG bytes or None on failure."""
        ...

    def capture_image(self) -> str | None:
        """Capture one frame as a data URI ready for the analysis service."""
        frame = self.capture_bytes()
        return encode_bytes(frame, "image/jpeg") if frame else None

    def release(self):
        pass
