from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ratiocard.layout.presets import DEFAULT_PRESETS, RatioPreset

@dataclass(frozen=True)
class Config:
    # Paths
    SOURCE_PATH: str = ""  # local path or http(s) URL
    OUT_DIR: Path = Path("./converted")

    # Background blur (slider range 10..100)
    BLUR_INTENSITY: int = 30
    BLUR_SIZE_MIN: int = 10
    BLUR_SIZE_MAX: int = 50
    COVER_OVERSHOOT: float = 1.2

    # Ratios closer than this are stretched instead of letterboxed
    RATIO_TOLERANCE: float = 0.01

    # Canvas / encoding
    MAX_CANVAS_PIXELS: int = 268_435_456  # 16384 x 16384
    PNG_COMPRESSION: int = 3  # 0..9, lossless at every level

    # Custom preset size (100..4096)
    CUSTOM_WIDTH: int = 1080
    CUSTOM_HEIGHT: int = 1080

    # Presets
    PRESETS: List[RatioPreset] = None

    # Pause between batch items
    BATCH_DELAY_S: float = 0.05

    def __post_init__(self):
        if self.PRESETS is None:
            object.__setattr__(self, "PRESETS", list(DEFAULT_PRESETS))
        if not isinstance(self.OUT_DIR, Path):
            object.__setattr__(self, "OUT_DIR", Path(self.OUT_DIR))
        if isinstance(self.BLUR_INTENSITY, bool) or not isinstance(self.BLUR_INTENSITY, int) \
                or self.BLUR_INTENSITY <= 0:
            raise ValueError(f"BLUR_INTENSITY must be a positive int, got {self.BLUR_INTENSITY!r}")
        for name in ("CUSTOM_WIDTH", "CUSTOM_HEIGHT"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or not 100 <= v <= 4096:
                raise ValueError(f"{name} must be within 100..4096, got {v}")
        if not 0 < self.BLUR_SIZE_MIN <= self.BLUR_SIZE_MAX:
            raise ValueError("BLUR_SIZE_MIN must be positive and <= BLUR_SIZE_MAX")
        if not 0 <= self.PNG_COMPRESSION <= 9:
            raise ValueError(f"PNG_COMPRESSION must be within 0..9, got {self.PNG_COMPRESSION}")
        if self.RATIO_TOLERANCE < 0 or self.BATCH_DELAY_S < 0:
            raise ValueError("RATIO_TOLERANCE and BATCH_DELAY_S must be non-negative")
        if self.COVER_OVERSHOOT < 1.0:
            raise ValueError("COVER_OVERSHOOT must be >= 1.0")
