"""Tests for K-means color quantization and the style palette."""

import numpy as np
import pytest

from tests.fixtures.oracle_fixtures import FailingQuantizer
from uiextract.model import Color, RasterBuffer
from uiextract.oracles import KMeansColorQuantizer, extract_style_palette
from uiextract.oracles.color_quantizer import DEFAULT_ACCENT, DEFAULT_PRIMARY, DEFAULT_SECONDARY


@pytest.fixture
def two_color_buffer():
    pixels = np.zeros((60, 90, 4), dtype=np.uint8)
    pixels[:, :60] = (59, 130, 246, 255)
    pixels[:, 60:] = (255, 255, 255, 255)
    return RasterBuffer(pixels)


class TestKMeansColorQuantizer:
    """Test whole-image dominant colors."""

    def test_colors_ordered_by_population(self, two_color_buffer):
        colors = KMeansColorQuantizer().top_colors(two_color_buffer, 3)
        assert colors == [Color(59, 130, 246), Color(255, 255, 255)]

    def test_transparent_pixels_ignored(self):
        pixels = np.zeros((20, 20, 4), dtype=np.uint8)
        pixels[:5, :5] = (200, 10, 10, 255)

        colors = KMeansColorQuantizer().top_colors(RasterBuffer(pixels), 4)

        assert colors == [Color(200, 10, 10)]

    def test_fully_transparent(self):
        buffer = RasterBuffer(np.zeros((10, 10, 4), dtype=np.uint8))
        assert KMeansColorQuantizer().top_colors(buffer, 5) == []

    def test_sampling_large_images(self):
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, size=(200, 200, 4), dtype=np.uint8)
        pixels[:, :, 3] = 255

        colors = KMeansColorQuantizer(sample_size=2000).top_colors(RasterBuffer(pixels), 5)

        assert 1 <= len(colors) <= 5


class TestStylePalette:
    """Test palette extraction and its fallback."""

    def test_palette_from_image(self, two_color_buffer):
        palette = extract_style_palette(two_color_buffer)

        assert palette.primary == "#3b82f6"
        assert palette.secondary == "#ffffff"
        assert palette.accent == DEFAULT_ACCENT
        assert palette.fallback is False
        assert palette.to_dict()["palette"] == ["#3b82f6", "#ffffff"]

    def test_fallback_when_empty(self):
        palette = extract_style_palette(RasterBuffer(np.zeros((10, 10, 4), dtype=np.uint8)))

        assert palette.fallback is True
        assert (palette.primary, palette.secondary, palette.accent) == (
            DEFAULT_PRIMARY,
            DEFAULT_SECONDARY,
            DEFAULT_ACCENT,
        )

    def test_fallback_when_quantizer_unavailable(self, two_color_buffer, caplog):
        with caplog.at_level("WARNING"):
            palette = extract_style_palette(two_color_buffer, quantizer=FailingQuantizer())

        assert palette.fallback is True
        assert "Color quantization failed" in caplog.text
