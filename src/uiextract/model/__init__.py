"""Data model for rasters, regions and detected components."""

from .color import MAX_RGB_DISTANCE, Color
from .component import (
    Border,
    ColorFeatures,
    ComponentProperties,
    ComponentStates,
    ComponentType,
    DetectedComponent,
    DetectionAnalysis,
    DetectionResult,
    Padding,
    Region,
    Shadow,
    StateVariant,
)
from .raster import RasterBuffer

__all__ = [
    "Border",
    "Color",
    "ColorFeatures",
    "ComponentProperties",
    "ComponentStates",
    "ComponentType",
    "DetectedComponent",
    "DetectionAnalysis",
    "DetectionResult",
    "MAX_RGB_DISTANCE",
    "Padding",
    "RasterBuffer",
    "Region",
    "Shadow",
    "StateVariant",
]
