"""
Whole-image color quantization

Uses K-means clustering over opaque pixels to find the most common colors
of an image, and derives the extracted style palette (primary, secondary,
accent) from them. Per-component palettes are measured separately by the
feature measurer; this module only works at the whole-image level.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from sklearn.cluster import KMeans

from ..detection_exceptions import OracleUnavailable
from ..model import Color, RasterBuffer

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY = "#3b82f6"
DEFAULT_SECONDARY = "#6366f1"
DEFAULT_ACCENT = "#f59e0b"


class ColorQuantizer(ABC):
    """Returns the most representative colors of an image."""

    name = "color_quantizer"

    @abstractmethod
    def top_colors(self, buffer: RasterBuffer, k: int) -> list[Color]:
        """Return up to ``k`` colors, most frequent first.

        Raises:
            OracleUnavailable: If quantization fails
        """


class KMeansColorQuantizer(ColorQuantizer):
    """
    K-means color quantizer

    Algorithm:
    1. Collect opaque pixels (alpha >= min_alpha), subsampled to sample_size
    2. Cluster into min(k, distinct colors) clusters
    3. Order cluster centers by population, largest first
    """

    name = "kmeans"

    def __init__(self, sample_size: int = 10000, min_alpha: int = 128, random_state: int = 0):
        self.sample_size = sample_size
        self.min_alpha = min_alpha
        self.random_state = random_state

    def top_colors(self, buffer: RasterBuffer, k: int) -> list[Color]:
        if k <= 0:
            return []

        pixels = buffer.pixels.reshape(-1, 4)
        opaque = pixels[pixels[:, 3] >= self.min_alpha][:, :3]
        if len(opaque) == 0:
            return []

        if len(opaque) > self.sample_size:
            rng = np.random.default_rng(self.random_state)
            opaque = opaque[rng.choice(len(opaque), self.sample_size, replace=False)]

        distinct = len(np.unique(opaque, axis=0))
        n_clusters = min(k, distinct)

        try:
            kmeans = KMeans(n_clusters=n_clusters, n_init=3, random_state=self.random_state)
            labels = kmeans.fit_predict(opaque.astype(np.float64))
        except ValueError as e:
            raise OracleUnavailable(self.name, str(e)) from e

        counts = np.bincount(labels, minlength=n_clusters)
        colors: list[Color] = []
        for cluster in np.argsort(-counts, kind="stable"):
            center = np.clip(np.rint(kmeans.cluster_centers_[cluster]), 0, 255).astype(int)
            color = Color(int(center[0]), int(center[1]), int(center[2]))
            if color not in colors:
                colors.append(color)
        return colors


@dataclass(frozen=True)
class StylePalette:
    """Image-level color tokens."""

    primary: str
    secondary: str
    accent: str
    palette: list[str] = field(default_factory=list)
    fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "palette": list(self.palette),
            "fallback": self.fallback,
        }


def extract_style_palette(
    buffer: RasterBuffer, quantizer: ColorQuantizer | None = None, k: int = 8
) -> StylePalette:
    """Build the whole-image style palette.

    Args:
        buffer: Source image
        quantizer: Color quantizer; K-means when omitted
        k: Number of palette colors requested

    Returns:
        StylePalette; neutral defaults with ``fallback=True`` when the
        quantizer is unavailable or finds no opaque pixels
    """
    quantizer = quantizer or KMeansColorQuantizer()
    try:
        colors = quantizer.top_colors(buffer, k)
    except OracleUnavailable as e:
        logger.warning(f"Color quantization failed, using default palette: {e}")
        colors = []

    if not colors:
        return StylePalette(
            primary=DEFAULT_PRIMARY,
            secondary=DEFAULT_SECONDARY,
            accent=DEFAULT_ACCENT,
            palette=[DEFAULT_PRIMARY, DEFAULT_SECONDARY, DEFAULT_ACCENT],
            fallback=True,
        )

    hex_colors = [color.to_hex() for color in colors]
    return StylePalette(
        primary=hex_colors[0],
        secondary=hex_colors[1] if len(hex_colors) > 1 else DEFAULT_SECONDARY,
        accent=hex_colors[2] if len(hex_colors) > 2 else DEFAULT_ACCENT,
        palette=hex_colors,
    )
