"""Tests for FeatureMeasurer."""

import numpy as np
import pytest

from tests.fixtures.oracle_fixtures import FailingTextOracle, StaticTextOracle
from tests.fixtures.raster_fixtures import ElementSpec
from uiextract.config import DetectionSettings
from uiextract.detection import FeatureMeasurer
from uiextract.detection.feature_measurer import (
    FALLBACK_DOMINANT,
    PLACEHOLDER_SHADOW,
    TEXT_SOURCE_HEURISTIC,
    TEXT_SOURCE_ORACLE,
)
from uiextract.model import Border, Color, Padding, RasterBuffer, Region

BLUE = Color(59, 130, 246)


def solid(height, width, rgba):
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return pixels


@pytest.fixture
def measurer():
    return FeatureMeasurer(DetectionSettings(use_text_oracle=False))


class TestColorMeasurement:
    """Test dominant color and palette sampling."""

    def test_uniform_region(self, measurer):
        colors = measurer.measure_colors(solid(40, 100, (59, 130, 246, 255)))

        assert colors.dominant == BLUE
        assert colors.palette == (BLUE,)

    def test_transparent_region_uses_fallback(self, measurer):
        colors = measurer.measure_colors(solid(40, 100, (59, 130, 246, 0)))

        assert colors.dominant == FALLBACK_DOMINANT
        assert colors.palette == ()

    def test_palette_ordered_by_frequency(self, measurer):
        pixels = solid(30, 30, (255, 0, 0, 255))
        pixels[20:, :] = (0, 255, 0, 255)

        colors = measurer.measure_colors(pixels)

        assert colors.dominant == Color(255, 0, 0)
        assert colors.palette == (Color(255, 0, 0), Color(0, 255, 0))

    def test_palette_size_limit(self):
        rng = np.random.default_rng(1)
        pixels = rng.integers(0, 256, size=(60, 60, 4), dtype=np.uint8)
        pixels[:, :, 3] = 255

        colors = FeatureMeasurer(DetectionSettings(palette_size=3)).measure_colors(pixels)

        assert len(colors.palette) == 3

    def test_only_top_left_window_is_sampled(self, measurer):
        pixels = solid(40, 200, (255, 255, 255, 255))
        pixels[:, 60:] = (0, 0, 0, 255)

        assert measurer.measure_colors(pixels).dominant == Color(255, 255, 255)


class TestDecorationMeasurement:
    """Test border radius, padding and border detection."""

    def test_square_corners(self):
        assert FeatureMeasurer.measure_border_radius(solid(40, 100, (0, 0, 0, 255))) == 1

    def test_transparent_region_has_no_radius(self):
        assert FeatureMeasurer.measure_border_radius(solid(40, 100, (0, 0, 0, 0))) == 0

    def test_rounded_corners_read_larger(self, raster_generator):
        square = raster_generator.generate_array(
            width=100, height=60, elements=[ElementSpec(x=0, y=0, width=100, height=60)]
        )
        rounded = raster_generator.generate_array(
            width=100,
            height=60,
            elements=[ElementSpec(x=0, y=0, width=100, height=60, corner_radius=12)],
        )

        square_radius = FeatureMeasurer.measure_border_radius(square)
        rounded_radius = FeatureMeasurer.measure_border_radius(rounded)

        assert rounded_radius > square_radius
        assert rounded_radius <= 15

    def test_padding_mirrors_top(self):
        pixels = solid(40, 100, (0, 0, 0, 0))
        pixels[3:, 5:] = (0, 0, 0, 255)

        assert FeatureMeasurer.measure_padding(pixels) == Padding(top=3, right=3, bottom=3, left=5)

    def test_padding_of_transparent_region(self):
        assert FeatureMeasurer.measure_padding(solid(10, 10, (0, 0, 0, 0))) == Padding()

    def test_uniform_top_edge_is_border(self):
        border = FeatureMeasurer.detect_border(solid(10, 50, (229, 231, 235, 255)))
        assert border == Border(width=1, color=Color(229, 231, 235), style="solid")

    def test_near_uniform_top_edge_is_border(self):
        pixels = solid(10, 50, (100, 100, 100, 255))
        pixels[0, 25] = (109, 91, 100, 255)

        assert FeatureMeasurer.detect_border(pixels) is not None

    def test_varied_top_edge_is_not_border(self):
        pixels = solid(10, 50, (100, 100, 100, 255))
        pixels[0, 25] = (110, 100, 100, 255)

        assert FeatureMeasurer.detect_border(pixels) is None


class TestTextDetection:
    """Test oracle use and the size heuristic fallback."""

    def test_heuristic_without_oracle(self, measurer):
        pixels = solid(30, 60, (0, 0, 0, 255))

        assert measurer.detect_text(pixels, Region(0, 0, 60, 30)) == (True, TEXT_SOURCE_HEURISTIC)
        assert measurer.detect_text(pixels, Region(0, 0, 50, 30)) == (False, TEXT_SOURCE_HEURISTIC)
        assert measurer.detect_text(pixels, Region(0, 0, 60, 20)) == (False, TEXT_SOURCE_HEURISTIC)

    def test_oracle_answer_is_used(self):
        oracle = StaticTextOracle(False)
        measurer = FeatureMeasurer(text_oracle=oracle)

        result = measurer.detect_text(solid(30, 60, (0, 0, 0, 255)), Region(0, 0, 60, 30))

        assert result == (False, TEXT_SOURCE_ORACLE)
        assert oracle.calls == 1

    def test_oracle_failure_falls_back(self, caplog):
        measurer = FeatureMeasurer(text_oracle=FailingTextOracle())

        with caplog.at_level("WARNING", logger="uiextract.detection.feature_measurer"):
            result = measurer.detect_text(solid(30, 60, (0, 0, 0, 255)), Region(0, 0, 60, 30))

        assert result == (True, TEXT_SOURCE_HEURISTIC)
        assert "Text oracle unavailable" in caplog.text


class TestMeasure:
    """Test measuring a whole region."""

    def test_measure_region(self, button_raster):
        measurer = FeatureMeasurer(text_oracle=StaticTextOracle(True))
        region = Region(0, 0, 200, 100)

        measurement = measurer.measure(button_raster, region)

        assert measurement.colors.dominant == BLUE
        assert measurement.has_text is True
        assert measurement.text_source == TEXT_SOURCE_ORACLE
        assert measurement.properties.width == 200
        assert measurement.properties.height == 100
        assert measurement.properties.shadow == PLACEHOLDER_SHADOW
        assert measurement.properties.border == Border(1, BLUE, "solid")

    def test_measure_does_not_mutate(self, button_raster):
        before = button_raster.pixels.copy()
        FeatureMeasurer().measure(button_raster, Region(0, 0, 300, 200))
        assert np.array_equal(before, button_raster.pixels)

    def test_buffer_from_bytes(self):
        buffer = RasterBuffer.from_rgba_bytes(60, 30, bytes([59, 130, 246, 255] * 1800))
        measurement = FeatureMeasurer().measure(buffer, Region(0, 0, 60, 30))
        assert measurement.colors.dominant == BLUE
