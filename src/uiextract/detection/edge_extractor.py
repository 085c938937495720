"""
Edge-based region extraction

Finds candidate components from their outlines:
- Grayscale conversion as the channel mean
- Sobel gradient magnitude, binarized at a fixed threshold
- 4-connected flood fill over edge pixels with an explicit stack
- Bounding box per connected component, filtered by size
"""

import logging

import cv2
import numpy as np

from ..config import ExtractionStrategy
from ..model import RasterBuffer, Region
from .base_extractor import RegionExtractor

logger = logging.getLogger(__name__)

# Stack operations between deadline checks
_DEADLINE_CHECK_INTERVAL = 65536


class EdgeRegionExtractor(RegionExtractor):
    """
    Extracts regions from connected edge components

    Algorithm:
    1. Compute (R+G+B)/3 grayscale
    2. Apply 3x3 Sobel kernels; edge iff magnitude > edge_threshold
    3. Flood fill each unvisited edge pixel (4-connected, stack-based)
    4. Keep bounding boxes at least min_region_size on both sides
    5. Sort by bounding-box area, largest first
    """

    strategy = ExtractionStrategy.EDGE

    def compute_edge_mask(self, buffer: RasterBuffer) -> np.ndarray:
        """Return a boolean ``(height, width)`` edge mask.

        The outermost pixel ring has no full 3x3 neighborhood and is never
        marked as an edge.
        """
        gray = buffer.grayscale()
        grad_x = cv2.Sobel(gray, cv2.CV_64F, 1, 0, ksize=3)
        grad_y = cv2.Sobel(gray, cv2.CV_64F, 0, 1, ksize=3)
        magnitude = np.sqrt(grad_x * grad_x + grad_y * grad_y)

        mask = magnitude > self.settings.edge_threshold
        mask[0, :] = False
        mask[-1, :] = False
        mask[:, 0] = False
        mask[:, -1] = False
        return mask

    def extract(self, buffer: RasterBuffer, deadline: float | None = None) -> list[Region]:
        mask = self.compute_edge_mask(buffer)
        self.check_deadline(deadline, "edge_detection")

        width, height = buffer.width, buffer.height
        edges = mask.ravel().tobytes()
        visited = bytearray(width * height)

        regions: list[Region] = []
        for start in np.flatnonzero(mask).tolist():
            if visited[start]:
                continue
            region = self._flood_fill(edges, visited, start, width, height, deadline)
            if region.width >= self.min_size and region.height >= self.min_size:
                regions.append(region)

        regions.sort(key=lambda region: region.area, reverse=True)
        logger.debug(f"Edge extraction found {len(regions)} regions in {width}x{height} buffer")
        return regions

    def _flood_fill(
        self,
        edges: bytes,
        visited: bytearray,
        start: int,
        width: int,
        height: int,
        deadline: float | None,
    ) -> Region:
        """Collect the 4-connected edge component containing ``start``.

        Args:
            edges: Flat edge mask, one byte per pixel
            visited: Flat visited arena, updated in place
            start: Flat index of an unvisited edge pixel
            width: Buffer width
            height: Buffer height
            deadline: Optional monotonic deadline

        Returns:
            Bounding region with ``pixel_count`` set to the component size
        """
        start_y, start_x = divmod(start, width)
        min_x = max_x = start_x
        min_y = max_y = start_y
        pixel_count = 0
        operations = 0

        stack = [start]
        while stack:
            index = stack.pop()
            operations += 1
            if deadline is not None and operations % _DEADLINE_CHECK_INTERVAL == 0:
                self.check_deadline(deadline, "flood_fill")

            if visited[index] or not edges[index]:
                continue

            visited[index] = 1
            pixel_count += 1

            y, x = divmod(index, width)
            if x < min_x:
                min_x = x
            elif x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            elif y > max_y:
                max_y = y

            if x + 1 < width:
                stack.append(index + 1)
            if x > 0:
                stack.append(index - 1)
            if y + 1 < height:
                stack.append(index + width)
            if y > 0:
                stack.append(index - width)

        return Region(
            x=min_x,
            y=min_y,
            width=max_x - min_x + 1,
            height=max_y - min_y + 1,
            pixel_count=pixel_count,
        )
