"""Tests for EdgeRegionExtractor."""

import time

import numpy as np
import pytest

from tests.fixtures.raster_fixtures import ElementSpec
from uiextract.config import DetectionSettings, ExtractionStrategy
from uiextract.detection import EdgeRegionExtractor
from uiextract.detection_exceptions import DetectionTimeout


@pytest.fixture
def extractor():
    return EdgeRegionExtractor(DetectionSettings(use_text_oracle=False))


def assert_region_invariants(regions, buffer, min_size=20):
    for region in regions:
        assert region.width >= min_size
        assert region.height >= min_size
        assert region.fits_within(buffer.width, buffer.height)


class TestEdgeMask:
    """Test Sobel edge mask computation."""

    def test_border_ring_is_never_an_edge(self, extractor, raster_generator):
        buffer = raster_generator.generate(width=60, height=40, noise_level=0.5)

        mask = extractor.compute_edge_mask(buffer)

        assert mask.shape == (40, 60)
        assert not mask[0, :].any()
        assert not mask[-1, :].any()
        assert not mask[:, 0].any()
        assert not mask[:, -1].any()

    def test_uniform_buffer_has_no_edges(self, extractor, blank_raster):
        assert not extractor.compute_edge_mask(blank_raster).any()


class TestEdgeExtraction:
    """Test region extraction from edge components."""

    def test_strategy(self, extractor):
        assert extractor.strategy == ExtractionStrategy.EDGE
        assert "edge" in repr(extractor)

    def test_rectangle_at_origin(self, extractor, button_raster):
        regions = extractor.extract(button_raster)

        assert len(regions) == 1
        region = regions[0]
        # the outermost ring is excluded, so the outline starts at (1, 1)
        assert (region.x, region.y) == (1, 1)
        assert (region.width, region.height) == (200, 100)
        assert region.pixel_count is not None
        assert region.pixel_count < region.area

    def test_closed_outline(self, extractor, raster_generator):
        buffer = raster_generator.generate(
            elements=[ElementSpec(x=100, y=100, width=200, height=40)]
        )

        regions = extractor.extract(buffer)

        assert len(regions) == 1
        region = regions[0]
        assert region.x <= 100 <= region.x + 1
        assert region.y <= 100 <= region.y + 1
        assert region.x + region.width >= 300
        assert region.y + region.height >= 140

    def test_empty_buffer_yields_nothing(self, extractor, blank_raster):
        assert extractor.extract(blank_raster) == []

    def test_small_components_filtered(self, extractor, raster_generator):
        buffer = raster_generator.generate(
            elements=[ElementSpec(x=50, y=50, width=10, height=10)]
        )
        assert extractor.extract(buffer) == []

    def test_sorted_by_area_descending(self, extractor, raster_generator):
        buffer = raster_generator.generate(
            width=400,
            height=300,
            elements=[
                ElementSpec(x=20, y=20, width=60, height=40),
                ElementSpec(x=150, y=100, width=200, height=150),
            ],
        )

        regions = extractor.extract(buffer)

        assert len(regions) == 2
        areas = [region.area for region in regions]
        assert areas == sorted(areas, reverse=True)
        assert_region_invariants(regions, buffer)

    def test_invariants_on_noise(self, extractor, raster_generator):
        buffer = raster_generator.generate(
            width=120, height=90, background=(128, 128, 128, 255), noise_level=0.3
        )

        regions = extractor.extract(buffer)

        assert_region_invariants(regions, buffer)

    def test_buffer_not_mutated(self, extractor, button_raster):
        before = button_raster.pixels.copy()
        extractor.extract(button_raster)
        assert np.array_equal(before, button_raster.pixels)

    def test_expired_deadline(self, extractor, button_raster):
        with pytest.raises(DetectionTimeout) as exc_info:
            extractor.extract(button_raster, deadline=time.monotonic() - 1)
        assert exc_info.value.error_code == "DETECTION_TIMEOUT"

    def test_min_region_size_setting(self, raster_generator):
        buffer = raster_generator.generate(
            elements=[ElementSpec(x=50, y=50, width=12, height=12)]
        )
        extractor = EdgeRegionExtractor(DetectionSettings(min_region_size=5))

        regions = extractor.extract(buffer)

        assert len(regions) == 1
        assert_region_invariants(regions, buffer, min_size=5)
