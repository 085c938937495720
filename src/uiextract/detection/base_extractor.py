"""Base class for region extraction strategies.

This module provides the abstract base class for extractors that turn a
raster buffer into candidate rectangular regions, establishing a common
interface and shared utility methods for both strategies.
"""

import time
from abc import ABC, abstractmethod

from ..config import DetectionSettings, ExtractionStrategy
from ..detection_exceptions import DetectionTimeout
from ..model import RasterBuffer, Region


class RegionExtractor(ABC):
    """Base class for region extraction strategies.

    Extractors are stateless between calls: any visited-pixel bookkeeping is
    allocated inside ``extract`` and discarded when it returns, so one
    instance can serve concurrent calls on different buffers.

    Attributes:
        settings: Detection settings supplying the strategy thresholds.

    Example:
        >>> extractor = EdgeRegionExtractor(DetectionSettings())
        >>> regions = extractor.extract(buffer)
        >>> for region in regions:
        ...     print(region.x, region.y, region.width, region.height)
    """

    strategy: ExtractionStrategy

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        """Initialize the extractor.

        Args:
            settings: Detection settings; defaults are used when omitted.
        """
        self.settings = settings or DetectionSettings()

    @property
    def min_size(self) -> int:
        return self.settings.min_region_size

    @abstractmethod
    def extract(self, buffer: RasterBuffer, deadline: float | None = None) -> list[Region]:
        """Extract candidate regions from a buffer.

        Args:
            buffer: Source raster; never mutated.
            deadline: Optional ``time.monotonic()`` value after which the
                scan stops with ``DetectionTimeout``.

        Returns:
            Regions whose width and height are both at least ``min_size``
            and which lie entirely within the buffer.
        """

    def filter_by_size(self, regions: list[Region]) -> list[Region]:
        """Drop regions narrower or shorter than ``min_size``."""
        return [
            region
            for region in regions
            if region.width >= self.min_size and region.height >= self.min_size
        ]

    @staticmethod
    def check_deadline(deadline: float | None, stage: str) -> None:
        """Raise ``DetectionTimeout`` once ``deadline`` has passed."""
        if deadline is not None and time.monotonic() > deadline:
            raise DetectionTimeout(stage)

    def __repr__(self) -> str:
        """Return string representation of extractor."""
        return f"{self.__class__.__name__}(strategy='{self.strategy.value}')"
