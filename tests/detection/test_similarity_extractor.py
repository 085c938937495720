"""Tests for SimilarityScanExtractor."""

import time

import pytest

from tests.fixtures.raster_fixtures import ElementSpec
from uiextract.config import DetectionSettings, ExtractionStrategy
from uiextract.detection import SimilarityScanExtractor
from uiextract.detection_exceptions import DetectionTimeout
from uiextract.model import Region


@pytest.fixture
def extractor():
    return SimilarityScanExtractor(DetectionSettings(use_text_oracle=False))


class TestSimilarityScan:
    """Test grid-seeded rectangle growth."""

    def test_strategy(self, extractor):
        assert extractor.strategy == ExtractionStrategy.SIMILARITY

    def test_single_rectangle_on_transparent(self, extractor, raster_generator):
        buffer = raster_generator.generate(
            elements=[ElementSpec(x=100, y=100, width=200, height=40)]
        )

        regions = extractor.extract(buffer)

        assert regions == [Region(100, 100, 200, 40)]

    def test_transparent_buffer_yields_nothing(self, extractor, raster_generator):
        assert extractor.extract(raster_generator.generate(width=100, height=100)) == []

    def test_uniform_buffer_is_one_region(self, extractor, raster_generator):
        buffer = raster_generator.generate(width=100, height=80, background=(255, 255, 255, 255))
        assert extractor.extract(buffer) == [Region(0, 0, 100, 80)]

    def test_growth_capped_by_span(self, extractor, raster_generator):
        buffer = raster_generator.generate(width=500, height=50, background=(10, 10, 10, 255))

        regions = extractor.extract(buffer)

        assert [(r.x, r.width) for r in regions] == [(0, 200), (200, 200), (400, 100)]
        assert all(region.height == 50 for region in regions)

    def test_buffer_smaller_than_min_size(self, extractor, raster_generator):
        buffer = raster_generator.generate(width=15, height=15, background=(255, 255, 255, 255))
        assert extractor.extract(buffer) == []

    def test_similar_colors_merge(self, extractor, raster_generator):
        # mean channel distance 20 is within the default threshold of 30
        buffer = raster_generator.generate(
            width=100,
            height=60,
            background=(200, 200, 200, 255),
            elements=[ElementSpec(x=50, y=0, width=50, height=60, color=(220, 220, 220))],
        )

        regions = extractor.extract(buffer)

        assert regions[0] == Region(0, 0, 100, 60)

    def test_invariants(self, extractor, raster_generator):
        buffer = raster_generator.generate(
            width=400,
            height=300,
            background=(255, 255, 255, 255),
            elements=[
                ElementSpec(x=30, y=40, width=120, height=40),
                ElementSpec(x=200, y=50, width=150, height=200, color=(16, 185, 129)),
                ElementSpec(x=40, y=150, width=100, height=100, color=(30, 30, 30)),
            ],
        )

        regions = extractor.extract(buffer)

        assert regions
        for index, region in enumerate(regions):
            assert region.width >= 20 and region.height >= 20
            assert region.width <= 200 and region.height <= 200
            assert region.fits_within(buffer.width, buffer.height)
            assert region.x % 10 == 0 and region.y % 10 == 0
            # no seed inside an earlier accepted region
            for earlier in regions[:index]:
                inside = (
                    earlier.x <= region.x < earlier.x + earlier.width
                    and earlier.y <= region.y < earlier.y + earlier.height
                )
                assert not inside

    def test_expired_deadline(self, extractor, blank_raster):
        with pytest.raises(DetectionTimeout):
            extractor.extract(blank_raster, deadline=time.monotonic() - 1)
