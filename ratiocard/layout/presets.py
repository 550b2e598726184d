from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ratiocard.layout.layout import TargetSpec

CUSTOM_ID = "custom"


@dataclass(frozen=True)
class RatioPreset:
    id: str
    name: str
    ratio_label: str
    width: int
    height: int

    @property
    def ratio(self) -> float:
        return self.width / self.height


DEFAULT_PRESETS: List[RatioPreset] = [
    RatioPreset("xiaohongshu-cover", "Xiaohongshu Cover", "3:4", 1080, 1440),
    RatioPreset("xiaohongshu-square", "Xiaohongshu Square", "1:1", 1080, 1080),
    RatioPreset("douyin-cover", "Douyin Cover", "9:16", 1080, 1920),
    RatioPreset("douyin-video", "Douyin Video", "16:9", 1920, 1080),
    RatioPreset("weibo-cover", "Weibo Cover", "16:9", 1920, 1080),
    RatioPreset("weibo-square", "Weibo Square", "1:1", 1080, 1080),
    RatioPreset("bilibili-cover", "Bilibili Cover", "16:9", 1920, 1080),
    RatioPreset("bilibili-vertical", "Bilibili Vertical", "9:16", 1080, 1920),
    RatioPreset("instagram-square", "Instagram Square", "1:1", 1080, 1080),
    RatioPreset("instagram-portrait", "Instagram Portrait", "4:5", 1080, 1350),
    RatioPreset("youtube-thumbnail", "YouTube", "16:9", 1280, 720),
    RatioPreset(CUSTOM_ID, "Custom", "custom", 1080, 1080),
]


class Presets:
    """Lookup and TargetSpec resolution over an injected preset table."""

    def __init__(self, presets: Sequence[RatioPreset], custom_size=(1080, 1080)):
        self.presets = list(presets)
        self.custom_size = custom_size

    def find(self, preset_id: str) -> Optional[RatioPreset]:
        for p in self.presets:
            if p.id == preset_id:
                return p
        return None

    def get(self, preset_id: str) -> RatioPreset:
        preset = self.find(preset_id)
        if preset is None:
            known = ", ".join(p.id for p in self.presets)
            raise KeyError(f"Unknown preset {preset_id!r} (known: {known})")
        return preset

    def batch(self) -> List[RatioPreset]:
        # convert-all skips the custom entry
        return [p for p in self.presets if p.id != CUSTOM_ID]

    def target_for(self, preset: RatioPreset, blur_intensity: int) -> TargetSpec:
        if preset.id == CUSTOM_ID:
            w, h = self.custom_size
        else:
            w, h = preset.width, preset.height
        return TargetSpec(w, h, blur_intensity)
