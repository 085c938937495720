"""Value types produced by the detection pipeline.

Every type here is immutable and JSON-serializable through ``to_dict``.
JSON keys follow the camelCase layout consumed by downstream tooling.
"""

import json
import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..detection_exceptions import InputError
from .color import Color


class ComponentType(str, Enum):
    """Component categories assigned by the classifier."""

    BUTTON = "button"
    CARD = "card"
    INPUT = "input"
    NAV_ITEM = "nav-item"
    CONTAINER = "container"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Region:
    """Axis-aligned candidate area in buffer coordinates.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width in pixels (> 0)
        height: Height in pixels (> 0)
        pixel_count: Pixels actually covered, when the extractor measured it
    """

    x: int
    y: int
    width: int
    height: int
    pixel_count: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InputError(f"Degenerate region {self.width}x{self.height}")
        if self.x < 0 or self.y < 0:
            raise InputError(f"Region origin ({self.x}, {self.y}) is negative")

    @property
    def area(self) -> int:
        """Bounding-box area."""
        return self.width * self.height

    @property
    def covered_area(self) -> int:
        """Area actually covered: ``pixel_count`` if known, else the bounding-box area."""
        return self.pixel_count if self.pixel_count is not None else self.area

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def fits_within(self, width: int, height: int) -> bool:
        """Check that the region lies inside a ``width x height`` buffer."""
        return self.x + self.width <= width and self.y + self.height <= height

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
        if self.pixel_count is not None:
            data["pixelCount"] = self.pixel_count
        return data


@dataclass(frozen=True)
class ColorFeatures:
    """Dominant color and frequency-ordered palette of a region."""

    dominant: Color
    palette: tuple[Color, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "dominant": self.dominant.to_css(),
            "palette": [color.to_css() for color in self.palette],
        }


@dataclass(frozen=True)
class Padding:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass(frozen=True)
class Border:
    width: int
    color: Color
    style: str = "solid"

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "color": self.color.to_css(), "style": self.style}


@dataclass(frozen=True)
class Shadow:
    offset_x: int
    offset_y: int
    blur_radius: int
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
            "blurRadius": self.blur_radius,
            "color": self.color,
        }


@dataclass(frozen=True)
class ComponentProperties:
    """Measured geometry and decoration of a component."""

    width: int
    height: int
    border_radius: int = 0
    padding: Padding = field(default_factory=Padding)
    border: Border | None = None
    shadow: Shadow | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "borderRadius": self.border_radius,
            "padding": self.padding.to_dict(),
            "border": self.border.to_dict() if self.border else None,
            "shadow": self.shadow.to_dict() if self.shadow else None,
        }


@dataclass(frozen=True)
class StateVariant:
    """Background color estimate for one interaction state."""

    background_color: Color
    brightness: float

    def to_dict(self) -> dict[str, Any]:
        return {"backgroundColor": self.background_color.to_css(), "brightness": self.brightness}


@dataclass(frozen=True)
class ComponentStates:
    default: StateVariant
    hover: StateVariant
    active: StateVariant

    def to_dict(self) -> dict[str, Any]:
        return {
            "default": self.default.to_dict(),
            "hover": self.hover.to_dict(),
            "active": self.active.to_dict(),
        }


@dataclass(frozen=True)
class DetectedComponent:
    """A classified component from one detection run.

    Attributes:
        id: Identifier unique within the run
        type: Assigned component type
        bounds: Region the component occupies
        properties: Measured geometry and decoration
        colors: Dominant color and palette
        has_text: Whether text was found inside the bounds
        confidence: Heuristic score in [0, 1]
        states: Optional hover/active color estimates
        text_source: ``"oracle"`` when has_text came from OCR, ``"heuristic"`` otherwise
    """

    id: str
    type: ComponentType
    bounds: Region
    properties: ComponentProperties
    colors: ColorFeatures
    has_text: bool
    confidence: float
    states: ComponentStates | None = None
    text_source: str = "heuristic"

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1], got {self.confidence}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "bounds": self.bounds.to_dict(),
            "properties": self.properties.to_dict(),
            "colors": self.colors.to_dict(),
            "hasText": self.has_text,
            "textSource": self.text_source,
            "confidence": self.confidence,
            "states": self.states.to_dict() if self.states else None,
        }


@dataclass(frozen=True)
class DetectionAnalysis:
    """Aggregate statistics over the components of one run."""

    total_components: int
    component_types: dict[str, int]
    average_width: int
    average_height: int
    detection_confidence: float

    @classmethod
    def from_components(cls, components: list[DetectedComponent]) -> "DetectionAnalysis":
        """Compute the analysis; an empty run yields zeros everywhere."""
        if not components:
            return cls(0, {}, 0, 0, 0.0)

        count = len(components)
        types = Counter(component.type.value for component in components)
        total_width = sum(component.bounds.width for component in components)
        total_height = sum(component.bounds.height for component in components)
        mean_confidence = sum(component.confidence for component in components) / count

        return cls(
            total_components=count,
            component_types=dict(types),
            average_width=int(math.floor(total_width / count + 0.5)),
            average_height=int(math.floor(total_height / count + 0.5)),
            detection_confidence=mean_confidence * 100,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalComponents": self.total_components,
            "componentTypes": dict(self.component_types),
            "averageSize": {"width": self.average_width, "height": self.average_height},
            "detectionConfidence": self.detection_confidence,
        }


@dataclass(frozen=True)
class DetectionResult:
    """Output of one detection run."""

    components: tuple[DetectedComponent, ...]
    analysis: DetectionAnalysis
    strategy: str = "edge"

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": [component.to_dict() for component in self.components],
            "analysis": self.analysis.to_dict(),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
