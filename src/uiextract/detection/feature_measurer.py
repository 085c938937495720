"""
Feature measurement for candidate regions

Measures, from the pixels inside a region:
- Dominant color and palette from capped sampling windows
- Border radius from diagonal corner walks
- Top/left padding from the first opaque row and column
- Uniform top edge as a 1px solid border
- Text presence through the text oracle, with a geometric fallback
"""

import logging
from collections import Counter
from dataclasses import dataclass

import numpy as np

from ..config import DetectionSettings
from ..detection_exceptions import OracleUnavailable
from ..model import (
    Border,
    Color,
    ColorFeatures,
    ComponentProperties,
    Padding,
    RasterBuffer,
    Region,
    Shadow,
)
from ..oracles import TextPresenceOracle

logger = logging.getLogger(__name__)

# Alpha a pixel must exceed to count as content for radius and padding
OPAQUE_ALPHA = 128

DOMINANT_WINDOW = 50
DOMINANT_STRIDE = 2
PALETTE_WINDOW = 30
PALETTE_STRIDE = 3
MAX_CORNER_RADIUS = 20
BORDER_CHANNEL_TOLERANCE = 10

FALLBACK_DOMINANT = Color(128, 128, 128)

# No exterior sampling is done, every region reports the same shadow
PLACEHOLDER_SHADOW = Shadow(offset_x=0, offset_y=2, blur_radius=4, color="rgba(0,0,0,0.1)")

TEXT_SOURCE_ORACLE = "oracle"
TEXT_SOURCE_HEURISTIC = "heuristic"


@dataclass(frozen=True)
class Measurement:
    """Features measured for one region."""

    colors: ColorFeatures
    has_text: bool
    text_source: str
    properties: ComponentProperties


class FeatureMeasurer:
    """
    Measures color, decoration and text features of a region

    The measurer never writes to the buffer. The text oracle is optional;
    without one (or when it fails) text presence is estimated from size.
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        text_oracle: TextPresenceOracle | None = None,
    ) -> None:
        self.settings = settings or DetectionSettings()
        self.text_oracle = text_oracle

    def measure(self, buffer: RasterBuffer, region: Region) -> Measurement:
        """Measure every feature of ``region``."""
        pixels = buffer.crop(region)
        has_text, text_source = self.detect_text(pixels, region)

        properties = ComponentProperties(
            width=region.width,
            height=region.height,
            border_radius=self.measure_border_radius(pixels),
            padding=self.measure_padding(pixels),
            border=self.detect_border(pixels),
            shadow=PLACEHOLDER_SHADOW,
        )

        return Measurement(
            colors=self.measure_colors(pixels),
            has_text=has_text,
            text_source=text_source,
            properties=properties,
        )

    def measure_colors(self, pixels: np.ndarray) -> ColorFeatures:
        """Dominant color and palette from the region's top-left windows."""
        dominant_counts = self._count_colors(pixels, DOMINANT_WINDOW, DOMINANT_STRIDE)
        palette_counts = self._count_colors(pixels, PALETTE_WINDOW, PALETTE_STRIDE)

        if dominant_counts:
            dominant = Color(*dominant_counts.most_common(1)[0][0])
        else:
            dominant = FALLBACK_DOMINANT

        palette = tuple(
            Color(*rgb) for rgb, _ in palette_counts.most_common(self.settings.palette_size)
        )
        return ColorFeatures(dominant=dominant, palette=palette)

    def _count_colors(self, pixels: np.ndarray, window: int, stride: int) -> Counter:
        sample = pixels[:window:stride, :window:stride].reshape(-1, 4)
        sample = sample[sample[:, 3] >= self.settings.min_alpha]
        return Counter(map(tuple, sample[:, :3].tolist()))

    @staticmethod
    def measure_border_radius(pixels: np.ndarray) -> int:
        """Average corner radius over the corners that produced a reading.

        Each corner is walked diagonally inward up to
        ``min(20, width / 4, height / 4)`` pixels; the first offset whose
        alpha exceeds 128 is that corner's radius.
        """
        height, width = pixels.shape[:2]
        alpha = pixels[:, :, 3]
        max_radius = min(MAX_CORNER_RADIUS, width / 4, height / 4)

        readings = []
        for from_left, from_top in ((True, True), (False, True), (True, False), (False, False)):
            radius = 0
            step = 1
            while step <= max_radius:
                x = step if from_left else width - 1 - step
                y = step if from_top else height - 1 - step
                if 0 <= x < width and 0 <= y < height and alpha[y, x] > OPAQUE_ALPHA:
                    radius = step
                    break
                step += 1
            if radius > 0:
                readings.append(radius)

        if not readings:
            return 0
        return int(np.floor(sum(readings) / len(readings) + 0.5))

    @staticmethod
    def measure_padding(pixels: np.ndarray) -> Padding:
        """Top and left padding from the first opaque row and column.

        Right and bottom mirror the top padding.
        """
        opaque = pixels[:, :, 3] > OPAQUE_ALPHA
        rows = np.flatnonzero(opaque.any(axis=1))
        columns = np.flatnonzero(opaque.any(axis=0))

        top = int(rows[0]) if rows.size else 0
        left = int(columns[0]) if columns.size else 0
        return Padding(top=top, right=top, bottom=top, left=left)

    @staticmethod
    def detect_border(pixels: np.ndarray) -> Border | None:
        """A 1px solid border when the whole top edge matches its first pixel."""
        top_edge = pixels[0, :, :3].astype(np.int16)
        first = top_edge[0]
        if np.all(np.abs(top_edge - first) < BORDER_CHANNEL_TOLERANCE):
            return Border(width=1, color=Color.from_rgba(first), style="solid")
        return None

    def detect_text(self, pixels: np.ndarray, region: Region) -> tuple[bool, str]:
        """Ask the text oracle, falling back to ``width > 50 and height > 20``.

        Returns:
            ``(has_text, text_source)``
        """
        if self.text_oracle is not None:
            try:
                return self.text_oracle.has_text(pixels), TEXT_SOURCE_ORACLE
            except OracleUnavailable as e:
                logger.warning(f"Text oracle unavailable for {region.to_dict()}: {e}")

        return region.width > 50 and region.height > 20, TEXT_SOURCE_HEURISTIC
