"""Tests for the blurred background synthesizer."""
import numpy as np
import pytest

from ratiocard.config import Config
from ratiocard.errors import ContextUnavailableError
from ratiocard.imaging.blur_background import BlurredBackgroundSynthesizer


@pytest.fixture
def synth():
    return BlurredBackgroundSynthesizer()


class TestDownsampleSize:
    """Tests for the blur strength clamp."""

    @pytest.mark.parametrize("blur,expected", [(10, 10), (20, 10), (30, 15), (60, 30), (100, 50), (400, 50)])
    def test_clamped_values(self, synth, blur, expected):
        assert synth.downsample_size(blur) == expected

    def test_monotonic_over_slider_range(self, synth):
        sizes = [synth.downsample_size(b) for b in range(10, 101)]
        assert sizes == sorted(sizes)
        assert min(sizes) == 10
        assert max(sizes) == 50

    def test_fractional_half_truncates(self, synth):
        assert synth.downsample_size(25) == 12

    def test_from_config(self):
        synth = BlurredBackgroundSynthesizer.from_config(Config(BLUR_SIZE_MIN=4, BLUR_SIZE_MAX=8))
        assert synth.downsample_size(2) == 4
        assert synth.downsample_size(100) == 8


class TestSynthesize:
    """Tests for background rendering."""

    def test_output_matches_target_size(self, synth, make_source):
        bg = synth.synthesize(make_source(80, 60), 108, 192, 30)
        assert bg.shape == (192, 108, 3)
        assert bg.dtype == np.uint8

    def test_solid_source_gives_solid_background(self, synth, make_source):
        bg = synth.synthesize(make_source(40, 30, color=(10, 200, 60)), 120, 120, 30)
        diff = np.abs(bg.astype(int) - np.array([10, 200, 60]))
        assert diff.max() <= 1

    def test_background_has_no_black_edges(self, synth, make_source):
        bg = synth.synthesize(make_source(300, 50, color=(255, 255, 255)), 100, 400, 10)
        for edge in (bg[0], bg[-1], bg[:, 0], bg[:, -1]):
            assert edge.min() >= 254

    def test_transparent_source_fills_black(self, synth, make_source):
        bg = synth.synthesize(make_source(50, 50, color=(255, 255, 255, 0)), 60, 90, 30)
        assert bg.max() <= 1

    def test_blur_removes_detail(self, synth, noise_source):
        bg = synth.synthesize(noise_source, 480, 480, 20)
        assert bg.std() < noise_source.pixels.std() / 2

    def test_deterministic(self, synth, make_source):
        src = make_source(64, 48)
        assert np.array_equal(synth.synthesize(src, 90, 90, 40), synth.synthesize(src, 90, 90, 40))

    def test_oversized_canvas_raises(self, make_source):
        synth = BlurredBackgroundSynthesizer(max_canvas_pixels=1000)
        with pytest.raises(ContextUnavailableError):
            synth.synthesize(make_source(10, 10), 100, 100, 30)
