"""uiextract: rule-based UI component extraction from screenshots.

Turns a raster image into a typed inventory of UI components (buttons,
cards, inputs, navigation items) with measured visual properties, and
validates detections against expected fixtures under tolerances.
"""

__version__ = "0.1.0"

from .base_exceptions import UIExtractException
from .config import DetectionSettings, ExtractionStrategy, get_settings
from .detection import ComponentDetector
from .detection_exceptions import (
    DetectionTimeout,
    InputError,
    OracleUnavailable,
    UnknownTestCaseError,
)
from .model import ComponentType, DetectedComponent, DetectionResult, RasterBuffer, Region
from .validation import ComponentValidator, ToleranceConfig, ValidationSuite

__all__ = [
    "ComponentDetector",
    "ComponentType",
    "ComponentValidator",
    "DetectedComponent",
    "DetectionResult",
    "DetectionSettings",
    "DetectionTimeout",
    "ExtractionStrategy",
    "InputError",
    "OracleUnavailable",
    "RasterBuffer",
    "Region",
    "ToleranceConfig",
    "UIExtractException",
    "UnknownTestCaseError",
    "ValidationSuite",
    "__version__",
]
