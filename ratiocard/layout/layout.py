from __future__ import annotations
import numbers
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TargetSpec:
    width: int
    height: int
    blur_intensity: int = 30

    def __post_init__(self):
        for v in (self.width, self.height):
            if isinstance(v, bool) or not isinstance(v, numbers.Integral):
                raise ValueError(f"Target size must be whole pixels, got {self.width!r}x{self.height!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Target size must be positive, got {self.width}x{self.height}")

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def to_px(self) -> Tuple[int, int, int, int]:
        """Whole-pixel (x, y, w, h); size never collapses below 1px."""
        return (int(round(self.x)), int(round(self.y)),
                max(1, int(round(self.w))), max(1, int(round(self.h))))

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2


class Layout:
    """Aspect ratio and fit/cover geometry."""

    @staticmethod
    def ratios_match(sw, sh, tw, th, tolerance: float = 0.01) -> bool:
        # absolute difference, not relative
        return abs(sw / sh - tw / th) < tolerance

    @staticmethod
    def fit_scale(sw, sh, tw, th) -> float:
        return min(tw / sw, th / sh)

    @staticmethod
    def cover_scale(sw, sh, tw, th) -> float:
        return max(tw / sw, th / sh)

    @staticmethod
    def centered(w: float, h: float, tw: int, th: int) -> Rect:
        return Rect((tw - w) / 2, (th - h) / 2, w, h)

    @staticmethod
    def fit_rect(sw, sh, tw, th) -> Rect:
        scale = Layout.fit_scale(sw, sh, tw, th)
        return Layout.centered(sw * scale, sh * scale, tw, th)

    @staticmethod
    def cover_rect(sw, sh, tw, th, overshoot: float = 1.0) -> Rect:
        scale = Layout.cover_scale(sw, sh, tw, th) * overshoot
        return Layout.centered(sw * scale, sh * scale, tw, th)
