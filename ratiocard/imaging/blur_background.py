from __future__ import annotations
import cv2
import numpy as np

from ratiocard.imaging.canvas import Canvas
from ratiocard.imaging.image_fitter import ImageFitter
from ratiocard.imaging.image_io import SourceImage


class BlurredBackgroundSynthesizer:
    """Full-bleed, color-matched blurred backdrop for letterboxed output.

    The blur is a resampling low-pass: the source is cover-drawn into the
    frame, squeezed down to a tiny square and smoothly blown back up.
    Smaller squares give softer backgrounds.
    """

    def __init__(self, size_min: int = 10, size_max: int = 50,
                 overshoot: float = 1.2, max_canvas_pixels: int = Canvas.MAX_PIXELS):
        self.size_min = size_min
        self.size_max = size_max
        self.overshoot = overshoot
        self.max_canvas_pixels = max_canvas_pixels

    @classmethod
    def from_config(cls, cfg) -> "BlurredBackgroundSynthesizer":
        return cls(cfg.BLUR_SIZE_MIN, cfg.BLUR_SIZE_MAX, cfg.COVER_OVERSHOOT, cfg.MAX_CANVAS_PIXELS)

    def downsample_size(self, blur_intensity: int) -> int:
        return int(max(self.size_min, min(self.size_max, blur_intensity / 2)))

    def synthesize(self, source: SourceImage, tw: int, th: int, blur_intensity: int) -> np.ndarray:
        s = self.downsample_size(blur_intensity)
        # 1.2x overshoot keeps the cover draw past every edge of the frame
        frame = Canvas.new(tw, th, self.max_canvas_pixels)
        ImageFitter.fit_cover(frame, source.pixels, self.overshoot)
        small = Canvas.resize(frame, s, s, cv2.INTER_AREA)
        return Canvas.resize(small, tw, th, cv2.INTER_CUBIC)
