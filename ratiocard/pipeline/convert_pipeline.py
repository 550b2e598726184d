from __future__ import annotations
import time
from pathlib import Path
from typing import Dict, Iterable, Optional

from ratiocard.config import Config
from ratiocard.imaging.fit_compositor import CompositeResult, FitCompositor
from ratiocard.imaging.image_io import ImageIO, SourceImage
from ratiocard.layout.presets import Presets, RatioPreset

class ConvertPipeline:
    """Converts one source into every requested preset, one after another."""

    def __init__(self, cfg: Config, compositor: Optional[FitCompositor] = None):
        self.cfg = cfg
        self.presets = Presets(cfg.PRESETS, (cfg.CUSTOM_WIDTH, cfg.CUSTOM_HEIGHT))
        self.compositor = compositor or FitCompositor.from_config(cfg)

    def output_path(self, stem: str, preset: RatioPreset) -> Path:
        return self.cfg.OUT_DIR / f"{stem}_{ImageIO.safe_slug(preset.name)}.png"

    def convert(self, source: SourceImage, preset: RatioPreset,
                blur_intensity: Optional[int] = None) -> CompositeResult:
        blur = self.cfg.BLUR_INTENSITY if blur_intensity is None else blur_intensity
        return self.compositor.composite_spec(source, self.presets.target_for(preset, blur))

    def convert_many(self, source: SourceImage, presets: Iterable[RatioPreset],
                     blur_intensity: Optional[int] = None,
                     write: bool = True) -> Dict[str, CompositeResult]:
        """Returns results keyed by preset id; failed presets are left out."""
        presets = list(presets)
        total = len(presets)
        results: Dict[str, CompositeResult] = {}
        if write:
            self.cfg.OUT_DIR.mkdir(parents=True, exist_ok=True)

        for i, preset in enumerate(presets, start=1):
            if i > 1 and self.cfg.BATCH_DELAY_S:
                time.sleep(self.cfg.BATCH_DELAY_S)
            try:
                result = self.convert(source, preset, blur_intensity)
                results[preset.id] = result
                if write:
                    out_path = self.output_path(ImageIO.safe_slug(source.name), preset)
                    out_path.write_bytes(result.png)
                    print(f"[{i}/{total}] OK -> {out_path.name} | {result.width}x{result.height}")
                else:
                    print(f"[{i}/{total}] OK -> {preset.id} | {result.width}x{result.height}")
            except Exception as e:
                print(f"[{i}/{total}] FAIL ({preset.id}): {e}")

        return results

    def run(self, preset_id: Optional[str] = None) -> Dict[str, CompositeResult]:
        if not self.cfg.SOURCE_PATH:
            raise ValueError("No source image given")

        source = ImageIO.load(self.cfg.SOURCE_PATH)
        print(f"INFO: source {source.name!r} {source.width}x{source.height}")

        presets = [self.presets.get(preset_id)] if preset_id else self.presets.batch()
        results = self.convert_many(source, presets)
        print(f"✅ Done. {len(results)}/{len(presets)} saved in {self.cfg.OUT_DIR.resolve()}")
        return results
