"""Component detection pipeline.

Runs region extraction, feature measurement, classification and state
estimation over one raster buffer and assembles the component inventory:

    buffer -> RegionExtractor -> FeatureMeasurer -> ComponentClassifier
           -> StateEstimator -> DetectionResult

Example:
    >>> detector = ComponentDetector()
    >>> result = detector.detect(RasterBuffer.from_file("screen.png"))
    >>> print(result.analysis.total_components)
"""

import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..config import DetectionSettings, ExtractionStrategy, get_settings
from ..logging import DetectionLogger, get_logger
from ..model import DetectedComponent, DetectionAnalysis, DetectionResult, RasterBuffer
from ..oracles import TesseractTextOracle, TextPresenceOracle
from .base_extractor import RegionExtractor
from .classifier import ClassifierThresholds, ComponentClassifier
from .edge_extractor import EdgeRegionExtractor
from .feature_measurer import FeatureMeasurer
from .similarity_extractor import SimilarityScanExtractor
from .state_estimator import StateEstimator


def create_extractor(
    strategy: ExtractionStrategy, settings: DetectionSettings | None = None
) -> RegionExtractor:
    """Create the region extractor for a strategy."""
    if strategy == ExtractionStrategy.SIMILARITY:
        return SimilarityScanExtractor(settings)
    return EdgeRegionExtractor(settings)


class ComponentDetector:
    """Detects UI components in raster images.

    The extractor and classifier presets follow ``settings.strategy`` unless
    explicitly supplied. When ``settings.use_text_oracle`` is set, no oracle
    is given and the classifier preset reads text presence, Tesseract is
    used for text presence.

    Attributes:
        settings: Detection settings
        extractor: Region extraction strategy
        measurer: Feature measurer
        classifier: Component classifier
        state_estimator: Hover/active estimator
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        text_oracle: TextPresenceOracle | None = None,
        extractor: RegionExtractor | None = None,
        classifier: ComponentClassifier | None = None,
        state_estimator: StateEstimator | None = None,
    ) -> None:
        self.settings = settings or get_settings()

        self.extractor = extractor or create_extractor(self.settings.strategy, self.settings)
        self.classifier = classifier or ComponentClassifier(
            ClassifierThresholds.for_strategy(self.extractor.strategy)
        )

        # Presets that never read text presence get the size heuristic only
        if (
            text_oracle is None
            and self.settings.use_text_oracle
            and self.classifier.thresholds.uses_text
        ):
            text_oracle = TesseractTextOracle(
                min_confidence=self.settings.ocr_min_confidence,
                timeout=self.settings.ocr_timeout,
            )

        self.measurer = FeatureMeasurer(self.settings, text_oracle)
        self.state_estimator = state_estimator or StateEstimator()
        self.detection_logger = DetectionLogger(get_logger(__name__))

    def detect(self, buffer: RasterBuffer) -> DetectionResult:
        """Run one detection pass.

        Args:
            buffer: Source raster; never mutated

        Returns:
            DetectionResult with components ordered as extracted

        Raises:
            DetectionTimeout: If the pass exceeds ``settings.detection_timeout``
        """
        start_time = time.monotonic()
        deadline = None
        if self.settings.detection_timeout is not None:
            deadline = start_time + self.settings.detection_timeout

        regions = self.extractor.extract(buffer, deadline)
        extracted_at = time.monotonic()
        self.detection_logger.log_timing("extract", extracted_at - start_time, regions=len(regions))

        components: list[DetectedComponent] = []
        for index, region in enumerate(regions):
            self.extractor.check_deadline(deadline, "measurement")

            measurement = self.measurer.measure(buffer, region)
            classification = self.classifier.classify(
                region, measurement.colors, measurement.has_text, measurement.properties
            )
            if classification.confidence <= self.settings.min_confidence:
                continue

            states = None
            if self.settings.estimate_states:
                states = self.state_estimator.estimate(measurement.colors.dominant)

            components.append(
                DetectedComponent(
                    id=f"component_{index}",
                    type=classification.type,
                    bounds=region,
                    properties=measurement.properties,
                    colors=measurement.colors,
                    has_text=measurement.has_text,
                    confidence=classification.confidence,
                    states=states,
                    text_source=measurement.text_source,
                )
            )

        finished_at = time.monotonic()
        self.detection_logger.log_timing("classify", finished_at - extracted_at)
        self.detection_logger.log_run(
            strategy=self.extractor.strategy.value,
            regions=len(regions),
            components=len(components),
            duration=finished_at - start_time,
            width=buffer.width,
            height=buffer.height,
        )

        return DetectionResult(
            components=tuple(components),
            analysis=DetectionAnalysis.from_components(components),
            strategy=self.extractor.strategy.value,
        )

    def detect_file(self, path: str | Path) -> DetectionResult:
        """Load an image file and detect its components."""
        return self.detect(RasterBuffer.from_file(path))

    def detect_batch(
        self, buffers: Iterable[RasterBuffer], max_workers: int | None = None
    ) -> list[DetectionResult]:
        """Detect several images in parallel.

        Each pass owns its own visited-pixel bookkeeping, so passes share
        nothing but this detector's read-only configuration.

        Args:
            buffers: Images to process
            max_workers: Worker threads; ``settings.max_workers`` by default

        Returns:
            Results in input order
        """
        workers = max_workers or self.settings.max_workers
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.detect, buffers))
