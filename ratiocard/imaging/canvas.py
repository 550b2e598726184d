import cv2
import numpy as np

from ratiocard.errors import ContextUnavailableError

class Canvas:
    """Allocates opaque BGR drawing surfaces."""
    MAX_PIXELS = 268_435_456

    @staticmethod
    def new(w: int, h: int, max_pixels: int = MAX_PIXELS) -> np.ndarray:
        if w <= 0 or h <= 0:
            raise ContextUnavailableError(f"Cannot create a {w}x{h} canvas")
        if w * h > max_pixels:
            raise ContextUnavailableError(
                f"Canvas {w}x{h} exceeds the {max_pixels} pixel limit"
            )
        try:
            return np.zeros((h, w, 3), np.uint8)
        except MemoryError as exc:
            raise ContextUnavailableError(f"Out of memory for a {w}x{h} canvas") from exc

    @staticmethod
    def resize(img: np.ndarray, w: int, h: int, interpolation: int) -> np.ndarray:
        try:
            return cv2.resize(img, (w, h), interpolation=interpolation)
        except (cv2.error, MemoryError) as exc:
            raise ContextUnavailableError(f"Resampling to {w}x{h} failed: {exc}") from exc
