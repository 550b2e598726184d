from __future__ import annotations
import base64
import io
import re
from dataclasses import dataclass
from pathlib import Path
import numpy as np
import cv2
import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from ratiocard.errors import EncodingError, InvalidSourceError

# Optional AVIF support (no-op if unavailable)
try:
    import pillow_avif  # noqa: F401
except ImportError:
    pass


@dataclass(frozen=True, eq=False)
class SourceImage:
    """Decoded BGR/BGRA raster, read-only once built."""
    pixels: np.ndarray
    name: str = "image"

    def __post_init__(self):
        arr = self.pixels
        if arr is None or arr.ndim not in (2, 3) or arr.size == 0:
            raise InvalidSourceError(f"Source {self.name!r} has no pixels")
        if arr.dtype != np.uint8:
            raise InvalidSourceError(f"Expected 8-bit pixels, got {arr.dtype}")
        if arr.ndim == 2:
            arr = cv2.cvtColor(arr, cv2.COLOR_GRAY2BGR)
        elif arr.shape[2] not in (3, 4):
            raise InvalidSourceError(f"Unsupported channel count: {arr.shape[2]}")
        arr = np.ascontiguousarray(arr)
        if arr is self.pixels:
            arr = arr.copy()
        arr.setflags(write=False)
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def has_alpha(self) -> bool:
        return self.pixels.shape[2] == 4


class ImageIO:
    """Loading local/remote images, PNG encoding and filename utilities."""

    @staticmethod
    def read_bytes(path_or_url: str) -> bytes:
        if path_or_url.startswith(("http://", "https://")):
            r = requests.get(path_or_url, timeout=60)
            r.raise_for_status()
            return r.content
        path = Path(path_or_url)
        if not path.is_file():
            raise FileNotFoundError(f"Source image not found: {path}")
        return path.read_bytes()

    @staticmethod
    def decode(data: bytes, name: str = "image") -> SourceImage:
        if not data:
            raise InvalidSourceError(f"Empty image data: {name}")
        arr = np.frombuffer(data, dtype=np.uint8)
        img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
        if img is not None and img.dtype == np.uint16:
            img = (img >> 8).astype(np.uint8)
        if img is not None and img.dtype == np.uint8:
            # IMREAD_UNCHANGED keeps alpha but skips the EXIF orientation tag
            img = ImageIO.apply_orientation(img, ImageIO.orientation(data))
            return SourceImage(img, name)
        # formats OpenCV can't read go through Pillow
        try:
            with Image.open(io.BytesIO(data)) as pil:
                return ImageIO.from_pil(ImageOps.exif_transpose(pil), name)
        except (UnidentifiedImageError, OSError) as exc:
            raise InvalidSourceError(f"Failed to decode image: {name}") from exc

    @staticmethod
    def orientation(data: bytes) -> int:
        try:
            with Image.open(io.BytesIO(data)) as pil:
                return int(pil.getexif().get(0x0112, 1))
        except (UnidentifiedImageError, OSError, ValueError, TypeError):
            return 1

    @staticmethod
    def apply_orientation(img: np.ndarray, orientation: int) -> np.ndarray:
        """Rotate/flip so the pixels read upright, as ImageOps.exif_transpose does."""
        if orientation == 2:
            return cv2.flip(img, 1)
        if orientation == 3:
            return cv2.rotate(img, cv2.ROTATE_180)
        if orientation == 4:
            return cv2.flip(img, 0)
        if orientation == 5:
            return cv2.transpose(img)
        if orientation == 6:
            return cv2.rotate(img, cv2.ROTATE_90_CLOCKWISE)
        if orientation == 7:
            return cv2.flip(cv2.transpose(img), -1)
        if orientation == 8:
            return cv2.rotate(img, cv2.ROTATE_90_COUNTERCLOCKWISE)
        return img

    @staticmethod
    def load(path_or_url: str) -> SourceImage:
        name = ImageIO.source_stem(path_or_url)
        return ImageIO.decode(ImageIO.read_bytes(path_or_url), name)

    @staticmethod
    def from_pil(pil: Image.Image, name: str = "image") -> SourceImage:
        has_alpha = "A" in pil.getbands()
        rgb = np.array(pil.convert("RGBA" if has_alpha else "RGB"))
        code = cv2.COLOR_RGBA2BGRA if has_alpha else cv2.COLOR_RGB2BGR
        return SourceImage(cv2.cvtColor(rgb, code), name)

    @staticmethod
    def encode_png(bgr: np.ndarray, compression: int = 3) -> bytes:
        try:
            ok, buf = cv2.imencode(".png", bgr, [cv2.IMWRITE_PNG_COMPRESSION, compression])
        except cv2.error as exc:
            raise EncodingError(f"PNG encoding failed: {exc}") from exc
        if not ok:
            raise EncodingError("PNG encoding failed")
        return buf.tobytes()

    @staticmethod
    def data_url(png: bytes) -> str:
        return "data:image/png;base64," + base64.b64encode(png).decode("ascii")

    @staticmethod
    def source_stem(path_or_url: str) -> str:
        tail = path_or_url.split("?")[0].replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
        return tail.split(".")[0] or "image"

    @staticmethod
    def safe_slug(text: str, max_len: int = 60) -> str:
        s = re.sub(r"[^\w\-]+", "_", text, flags=re.UNICODE).strip("_")
        return s[:max_len] or "untitled"
