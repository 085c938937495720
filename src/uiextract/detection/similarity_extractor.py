"""
Color-similarity region extraction

Finds flat-colored rectangles by growing outward from grid seeds:
- Seeds every grid_step pixels, skipping transparent and visited seeds
- Width grows along the seed row, height along the seed column
- Growth stops at the first pixel whose mean channel distance exceeds the threshold
"""

import logging

import numpy as np

from ..config import ExtractionStrategy
from ..model import RasterBuffer, Region
from .base_extractor import RegionExtractor

logger = logging.getLogger(__name__)


class SimilarityScanExtractor(RegionExtractor):
    """
    Extracts rectangles of near-uniform color

    Algorithm:
    1. Visit seeds on a grid_step grid (rows first)
    2. Skip seeds already covered by an accepted region or with alpha < min_alpha
    3. Grow right and down, at most max_region_span pixels each, while
       (|dr| + |dg| + |db|) / 3 <= similarity_threshold against the seed
    4. Accept when both sides reach min_region_size; mark the rectangle visited
    """

    strategy = ExtractionStrategy.SIMILARITY

    def extract(self, buffer: RasterBuffer, deadline: float | None = None) -> list[Region]:
        width, height = buffer.width, buffer.height
        rgb = buffer.pixels[:, :, :3].astype(np.int16)
        alpha = buffer.pixels[:, :, 3]
        visited = np.zeros((height, width), dtype=bool)

        step = self.settings.grid_step
        regions: list[Region] = []

        for y in range(0, height - self.min_size, step):
            self.check_deadline(deadline, "similarity_scan")
            for x in range(0, width - self.min_size, step):
                if visited[y, x] or alpha[y, x] < self.settings.min_alpha:
                    continue

                region = self._grow_region(rgb, x, y)
                if region is None:
                    continue

                visited[region.y : region.y + region.height, region.x : region.x + region.width] = True
                regions.append(region)

        logger.debug(f"Similarity scan found {len(regions)} regions in {width}x{height} buffer")
        return regions

    def _grow_region(self, rgb: np.ndarray, x: int, y: int) -> Region | None:
        """Grow a rectangle from the seed at ``(x, y)``.

        Returns:
            The accepted region, or None when either side is below min_size
        """
        seed = rgb[y, x]
        span = self.settings.max_region_span

        run_width = self._similar_run(rgb[y, x : x + span], seed)
        run_height = self._similar_run(rgb[y : y + span, x], seed)

        if run_width < self.min_size or run_height < self.min_size:
            return None
        return Region(x=x, y=y, width=run_width, height=run_height)

    def _similar_run(self, pixels: np.ndarray, seed: np.ndarray) -> int:
        """Length of the leading run of pixels similar to ``seed``."""
        distance = np.abs(pixels - seed).sum(axis=1) / 3.0
        similar = distance <= self.settings.similarity_threshold
        if similar.all():
            return int(similar.size)
        return int(np.argmin(similar))
