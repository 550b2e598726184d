import numpy as np

class OverlayComposer:
    """Draws BGR/BGRA images onto an opaque BGR canvas."""
    @staticmethod
    def draw(canvas_bgr: np.ndarray, img: np.ndarray, x: int, y: int) -> np.ndarray:
        """Paste ``img`` with its top-left at (x, y), clipped to the canvas.

        BGRA input is alpha-blended over what is already on the canvas, so
        the canvas stays fully opaque.
        """
        H, W = canvas_bgr.shape[:2]
        h, w = img.shape[:2]
        l, t = max(0, x), max(0, y)
        r, b = min(W, x + w), min(H, y + h)
        if r <= l or b <= t:
            return canvas_bgr
        patch = img[t - y:b - y, l - x:r - x]
        if patch.shape[2] == 3:
            canvas_bgr[t:b, l:r] = patch
            return canvas_bgr
        alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
        under = canvas_bgr[t:b, l:r].astype(np.float32)
        over = patch[:, :, :3].astype(np.float32)
        canvas_bgr[t:b, l:r] = np.clip(over * alpha + under * (1.0 - alpha) + 0.5, 0, 255).astype(np.uint8)
        return canvas_bgr
