"""Component detection module for identifying UI components in raster images.

This module turns a raster buffer into a typed inventory of components using
rule-based computer vision: region extraction, feature measurement,
classification and state estimation.

Key Components:
    - RegionExtractor base class with two strategies:
      EdgeRegionExtractor (Sobel + flood fill) and
      SimilarityScanExtractor (grid color-similarity scan)
    - FeatureMeasurer: colors, border radius, padding, border, text presence
    - ComponentClassifier with text-aware and geometry-only presets
    - StateEstimator: hover/active color variants
    - ComponentDetector: the full pipeline

Example:
    >>> from uiextract.detection import ComponentDetector
    >>> result = ComponentDetector().detect_file("screen.png")
    >>> for component in result.components:
    ...     print(component.type.value, component.bounds)
"""

from ..config import ExtractionStrategy
from .base_extractor import RegionExtractor
from .classifier import (
    Classification,
    ClassifierThresholds,
    ComponentClassifier,
    score_confidence,
)
from .component_detector import ComponentDetector, create_extractor
from .edge_extractor import EdgeRegionExtractor
from .feature_measurer import FeatureMeasurer, Measurement
from .similarity_extractor import SimilarityScanExtractor
from .state_estimator import StateEstimator

__all__: list[str] = [
    "Classification",
    "ClassifierThresholds",
    "ComponentClassifier",
    "ComponentDetector",
    "EdgeRegionExtractor",
    "ExtractionStrategy",
    "FeatureMeasurer",
    "Measurement",
    "RegionExtractor",
    "SimilarityScanExtractor",
    "StateEstimator",
    "create_extractor",
    "score_confidence",
]
