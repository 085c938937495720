"""
Rule-based component classification

Assigns a component type from geometry, text presence and border radius.
Rules are evaluated in a fixed order (button, card, input, nav-item) and the
first match wins. The two extraction strategies come with their own
threshold presets.
"""

from dataclasses import dataclass

from ..config import ExtractionStrategy
from ..model import ColorFeatures, ComponentProperties, ComponentType, Region


@dataclass(frozen=True)
class ClassifierThresholds:
    """Thresholds for the ordered classification rules.

    A ``None`` requirement is not checked.
    """

    # button
    button_min_aspect: float
    button_max_aspect: float
    button_max_area: float
    button_max_height: float | None
    button_requires_text: bool
    # card
    card_min_area: float
    card_max_aspect: float | None
    card_min_border_radius: float | None
    # input
    input_min_aspect: float
    input_max_height: float
    input_max_border_radius: float | None
    # nav-item
    nav_min_aspect: float
    nav_max_height: float
    nav_requires_text: bool
    # fallback
    default_type: ComponentType

    @classmethod
    def text_aware(cls) -> "ClassifierThresholds":
        """Preset paired with edge extraction; uses text presence."""
        return cls(
            button_min_aspect=1.5,
            button_max_aspect=5.0,
            button_max_area=15000,
            button_max_height=None,
            button_requires_text=True,
            card_min_area=20000,
            card_max_aspect=None,
            card_min_border_radius=4,
            input_min_aspect=3.0,
            input_max_height=60,
            input_max_border_radius=8,
            nav_min_aspect=2.0,
            nav_max_height=50,
            nav_requires_text=True,
            default_type=ComponentType.UNKNOWN,
        )

    @classmethod
    def geometry_only(cls) -> "ClassifierThresholds":
        """Preset paired with the similarity scan; ignores text presence."""
        return cls(
            button_min_aspect=1.5,
            button_max_aspect=6.0,
            button_max_area=20000,
            button_max_height=60,
            button_requires_text=False,
            card_min_area=15000,
            card_max_aspect=3.0,
            card_min_border_radius=None,
            input_min_aspect=3.0,
            input_max_height=50,
            input_max_border_radius=None,
            nav_min_aspect=2.0,
            nav_max_height=40,
            nav_requires_text=False,
            default_type=ComponentType.CONTAINER,
        )

    @property
    def uses_text(self) -> bool:
        """Whether any rule reads text presence."""
        return self.button_requires_text or self.nav_requires_text

    @classmethod
    def for_strategy(cls, strategy: ExtractionStrategy) -> "ClassifierThresholds":
        if strategy == ExtractionStrategy.SIMILARITY:
            return cls.geometry_only()
        return cls.text_aware()


@dataclass(frozen=True)
class Classification:
    type: ComponentType
    confidence: float


def score_confidence(region: Region) -> float:
    """Heuristic confidence that a region is a genuine UI component.

    Starts at 0.5; +0.2 for aspect ratio in (0.5, 10), +0.2 for bounding-box
    area in (400, 50000), +0.1 when wider than 30 and taller than 20.
    """
    aspect_ratio = region.aspect_ratio
    area = region.area

    confidence = 0.5
    if 0.5 < aspect_ratio < 10:
        confidence += 0.2
    if 400 < area < 50000:
        confidence += 0.2
    if region.width > 30 and region.height > 20:
        confidence += 0.1

    return round(min(confidence, 1.0), 10)


class ComponentClassifier:
    """Pure, deterministic classifier over region features.

    The area checked by the rules is the region's covered area: the number
    of pixels the extractor attributed to it when known, the bounding-box
    area otherwise.
    """

    def __init__(self, thresholds: ClassifierThresholds | None = None) -> None:
        self.thresholds = thresholds or ClassifierThresholds.text_aware()

    def classify(
        self,
        region: Region,
        colors: ColorFeatures,
        has_text: bool,
        properties: ComponentProperties,
    ) -> Classification:
        return Classification(
            type=self.classify_type(region, has_text, properties),
            confidence=score_confidence(region),
        )

    def classify_type(
        self, region: Region, has_text: bool, properties: ComponentProperties
    ) -> ComponentType:
        t = self.thresholds
        aspect_ratio = region.aspect_ratio
        area = region.covered_area
        height = region.height
        radius = properties.border_radius

        if (
            t.button_min_aspect < aspect_ratio < t.button_max_aspect
            and area < t.button_max_area
            and (t.button_max_height is None or height < t.button_max_height)
            and (has_text or not t.button_requires_text)
        ):
            return ComponentType.BUTTON

        if (
            area > t.card_min_area
            and (t.card_max_aspect is None or aspect_ratio < t.card_max_aspect)
            and (t.card_min_border_radius is None or radius > t.card_min_border_radius)
        ):
            return ComponentType.CARD

        if (
            aspect_ratio > t.input_min_aspect
            and height < t.input_max_height
            and (t.input_max_border_radius is None or radius < t.input_max_border_radius)
        ):
            return ComponentType.INPUT

        if (
            aspect_ratio > t.nav_min_aspect
            and height < t.nav_max_height
            and (has_text or not t.nav_requires_text)
        ):
            return ComponentType.NAV_ITEM

        return t.default_type
