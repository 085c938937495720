"""External oracles consumed by the detection pipeline.

Key Components:
    - TextPresenceOracle / TesseractTextOracle: per-region text presence
    - ColorQuantizer / KMeansColorQuantizer: whole-image dominant colors
    - extract_style_palette: image-level style tokens with neutral fallback
"""

from .color_quantizer import (
    ColorQuantizer,
    KMeansColorQuantizer,
    StylePalette,
    extract_style_palette,
)
from .text_oracle import TesseractTextOracle, TextPresenceOracle

__all__ = [
    "ColorQuantizer",
    "KMeansColorQuantizer",
    "StylePalette",
    "TesseractTextOracle",
    "TextPresenceOracle",
    "extract_style_palette",
]
