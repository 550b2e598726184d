import cv2
import numpy as np

from ratiocard.errors import ContextUnavailableError
from ratiocard.imaging.canvas import Canvas
from ratiocard.imaging.overlay_composer import OverlayComposer
from ratiocard.layout.layout import Layout, Rect

class ImageFitter:
    """Stretch, contain and overshooting cover draws onto opaque canvases."""
    @staticmethod
    def interpolation_for(src_w: int, src_h: int, dst_w: int, dst_h: int) -> int:
        if dst_w < src_w or dst_h < src_h:
            return cv2.INTER_AREA
        return cv2.INTER_CUBIC

    @staticmethod
    def scaled(src: np.ndarray, w: int, h: int) -> np.ndarray:
        sh, sw = src.shape[:2]
        if (sw, sh) == (w, h):
            return src
        return Canvas.resize(src, w, h, ImageFitter.interpolation_for(sw, sh, w, h))

    @staticmethod
    def draw_rect(canvas_bgr: np.ndarray, src: np.ndarray, rect: Rect) -> np.ndarray:
        x, y, w, h = rect.to_px()
        return OverlayComposer.draw(canvas_bgr, ImageFitter.scaled(src, w, h), x, y)

    @staticmethod
    def stretch(canvas_bgr: np.ndarray, src: np.ndarray) -> np.ndarray:
        th, tw = canvas_bgr.shape[:2]
        return ImageFitter.draw_rect(canvas_bgr, src, Rect(0, 0, tw, th))

    @staticmethod
    def fit_contain(canvas_bgr: np.ndarray, src: np.ndarray) -> Rect:
        """Draw ``src`` centered at fit scale; returns the placement used."""
        th, tw = canvas_bgr.shape[:2]
        sh, sw = src.shape[:2]
        rect = Layout.fit_rect(sw, sh, tw, th)
        ImageFitter.draw_rect(canvas_bgr, src, rect)
        return rect

    @staticmethod
    def fit_cover(canvas_bgr: np.ndarray, src: np.ndarray, overshoot: float = 1.0) -> np.ndarray:
        """Aspect-fill scale (times ``overshoot``), centered, cropped to the canvas."""
        th, tw = canvas_bgr.shape[:2]
        sh, sw = src.shape[:2]
        scale = Layout.cover_scale(sw, sh, tw, th) * overshoot
        # Map frame pixels straight back into the source so the oversized
        # intermediate is never materialised.
        m = np.float32([
            [scale, 0, (tw - sw * scale) / 2],
            [0, scale, (th - sh * scale) / 2],
        ])
        try:
            warped = cv2.warpAffine(src, m, (tw, th), flags=cv2.INTER_LINEAR,
                                    borderMode=cv2.BORDER_CONSTANT, borderValue=0)
        except (cv2.error, MemoryError) as exc:
            raise ContextUnavailableError(f"Cover draw to {tw}x{th} failed: {exc}") from exc
        return OverlayComposer.draw(canvas_bgr, warped, 0, 0)
