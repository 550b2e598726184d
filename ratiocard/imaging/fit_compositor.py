from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ratiocard.errors import InvalidSourceError
from ratiocard.imaging.blur_background import BlurredBackgroundSynthesizer
from ratiocard.imaging.canvas import Canvas
from ratiocard.imaging.image_fitter import ImageFitter
from ratiocard.imaging.image_io import ImageIO, SourceImage
from ratiocard.imaging.overlay_composer import OverlayComposer
from ratiocard.layout.layout import Layout, Rect, TargetSpec


@dataclass(frozen=True, eq=False)
class CompositeResult:
    pixels: np.ndarray = field(repr=False)  # opaque BGR, target_h x target_w
    png: bytes = field(repr=False)
    width: int
    height: int
    used_background: bool
    placement: Rect  # where the source landed

    def to_data_url(self) -> str:
        return ImageIO.data_url(self.png)


class FitCompositor:
    """Letterbox/pillarbox a source into a target frame over a blurred fill."""

    def __init__(self, tolerance: float = 0.01,
                 synthesizer: Optional[BlurredBackgroundSynthesizer] = None,
                 png_compression: int = 3, max_canvas_pixels: int = Canvas.MAX_PIXELS):
        self.tolerance = tolerance
        self.synthesizer = synthesizer or BlurredBackgroundSynthesizer(max_canvas_pixels=max_canvas_pixels)
        self.png_compression = png_compression
        self.max_canvas_pixels = max_canvas_pixels

    @classmethod
    def from_config(cls, cfg) -> "FitCompositor":
        return cls(
            tolerance=cfg.RATIO_TOLERANCE,
            synthesizer=BlurredBackgroundSynthesizer.from_config(cfg),
            png_compression=cfg.PNG_COMPRESSION,
            max_canvas_pixels=cfg.MAX_CANVAS_PIXELS,
        )

    def composite(self, source: SourceImage, tw: int, th: int, blur_intensity: int) -> CompositeResult:
        sw, sh = source.width, source.height
        if sw <= 0 or sh <= 0:
            raise InvalidSourceError(f"Source has no area: {sw}x{sh}")
        if tw <= 0 or th <= 0:
            raise ValueError(f"Target size must be positive, got {tw}x{th}")

        canvas = Canvas.new(tw, th, self.max_canvas_pixels)
        if Layout.ratios_match(sw, sh, tw, th, self.tolerance):
            ImageFitter.stretch(canvas, source.pixels)
            placement, used_background = Rect(0, 0, tw, th), False
        else:
            background = self.synthesizer.synthesize(source, tw, th, blur_intensity)
            OverlayComposer.draw(canvas, background, 0, 0)
            placement = ImageFitter.fit_contain(canvas, source.pixels)
            used_background = True

        png = ImageIO.encode_png(canvas, self.png_compression)
        canvas.setflags(write=False)
        return CompositeResult(canvas, png, tw, th, used_background, placement)

    def composite_spec(self, source: SourceImage, target: TargetSpec) -> CompositeResult:
        return self.composite(source, target.width, target.height, target.blur_intensity)
