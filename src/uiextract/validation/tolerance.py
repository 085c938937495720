"""Tolerance resolution and property comparison rules.

Numbers pass when their percentage deviation is within tolerance, colors
when their RGB similarity is at least ``100 - tolerance``, and other
strings on a case-insensitive exact match.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import ToleranceSettings
from ..model import MAX_RGB_DISTANCE, Color
from .validation_types import PropertyCheck

DEFAULT_TOLERANCE = 10.0

# Property name (or first dotted segment) to tolerance category
PROPERTY_CATEGORIES: dict[str, str] = {
    "backgroundColor": "colors",
    "color": "colors",
    "borderColor": "colors",
    "colors": "colors",
    "padding": "spacing",
    "paddingX": "spacing",
    "paddingY": "spacing",
    "margin": "spacing",
    "gap": "spacing",
    "fontSize": "typography",
    "fontWeight": "typography",
    "lineHeight": "typography",
    "letterSpacing": "typography",
    "borderRadius": "border_radius",
}


@dataclass(frozen=True)
class ToleranceConfig:
    """Where tolerances come from, most specific first.

    Attributes:
        global_tolerance: Used when nothing more specific applies
        properties: Per-property overrides
        categories: Per-category overrides (colors, spacing, typography, border_radius)
    """

    global_tolerance: float = DEFAULT_TOLERANCE
    properties: dict[str, float] = field(default_factory=dict)
    categories: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: ToleranceSettings) -> "ToleranceConfig":
        categories = {
            name: value
            for name, value in (
                ("colors", settings.colors),
                ("spacing", settings.spacing),
                ("typography", settings.typography),
                ("border_radius", settings.border_radius),
            )
            if value is not None
        }
        return cls(global_tolerance=settings.global_tolerance, categories=categories)

    def resolve(self, property_name: str, overrides: dict[str, float] | None = None) -> float:
        """Tolerance for a property: fixture override, property, category, global."""
        if overrides and overrides.get(property_name) is not None:
            return float(overrides[property_name])
        if property_name in self.properties:
            return float(self.properties[property_name])

        category = PROPERTY_CATEGORIES.get(property_name) or PROPERTY_CATEGORIES.get(
            property_name.split(".")[0]
        )
        if category is not None and category in self.categories:
            return float(self.categories[category])
        return float(self.global_tolerance)


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def looks_like_color(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower().startswith(("#", "rgb"))


def normalize_value(value: Any) -> Any:
    """Convert model values to the plain JSON form used in comparisons."""
    if isinstance(value, Color):
        return value.to_css()
    if isinstance(value, Enum):
        return value.value
    return value


def numeric_deviation(expected: float, actual: float) -> float:
    """Percentage deviation ``|expected - actual| / expected * 100``.

    An expected value of 0 yields 0 for an exact match and infinity otherwise.
    """
    if expected == 0:
        return 0.0 if actual == 0 else math.inf
    return abs(expected - actual) / abs(expected) * 100


def color_similarity(expected: Color, actual: Color) -> float:
    """Similarity score in [0, 100]; 100 for identical colors."""
    return (1 - expected.distance(actual) / MAX_RGB_DISTANCE) * 100


def compare_property(expected: Any, actual: Any, tolerance: float) -> PropertyCheck:
    """Compare one expected property value against the detected value."""
    actual = normalize_value(actual)

    if is_numeric(expected) and is_numeric(actual):
        deviation = numeric_deviation(expected, actual)
        return PropertyCheck(expected, actual, tolerance, deviation <= tolerance, deviation)

    if isinstance(expected, str) and isinstance(actual, str):
        if looks_like_color(expected):
            expected_color = Color.try_parse(expected)
            actual_color = Color.try_parse(actual)
            if expected_color is not None and actual_color is not None:
                similarity = color_similarity(expected_color, actual_color)
                valid = similarity >= 100 - tolerance
                return PropertyCheck(expected, actual, tolerance, valid, 100 - similarity)
            valid = expected == actual
        else:
            valid = expected.lower() == actual.lower()
        return PropertyCheck(expected, actual, tolerance, valid, 0.0 if valid else 100.0)

    valid = expected == actual
    return PropertyCheck(expected, actual, tolerance, valid, 0.0 if valid else 100.0)
