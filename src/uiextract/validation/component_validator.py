"""Validate detected components against expected fixtures."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..model import DetectedComponent
from .tolerance import ToleranceConfig, compare_property
from .validation_types import ComponentVerdict, ExpectedComponent, ValidationResult

logger = logging.getLogger(__name__)

NOT_DETECTED = "Component not detected"

# Maximum per-axis offset (exclusive) for a bounds match
BOUNDS_MATCH_DISTANCE = 50

# Fixture property names that map onto a different path in the detection output
PROPERTY_ALIASES: dict[str, str] = {
    "backgroundColor": "colors.dominant",
    "paddingX": "properties.padding.left",
    "paddingY": "properties.padding.top",
    "hasText": "hasText",
}

_MISSING = object()


def _lookup(data: Any, path: str) -> Any:
    current = data
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


def resolve_property(component: Mapping[str, Any], name: str) -> Any:
    """Find a property value on a detected component dict.

    Looks in ``properties`` first, then the whole component, then the
    alias table. Returns None when nothing matches.
    """
    for source, path in (
        (component.get("properties"), name),
        (component, name),
        (component, PROPERTY_ALIASES.get(name)),
    ):
        if path is None:
            continue
        value = _lookup(source, path)
        if value is not _MISSING:
            return value
    return None


def _as_dict(component: DetectedComponent | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(component, DetectedComponent):
        return component.to_dict()
    return dict(component)


class ComponentValidator:
    """Compare detected components with expected ones under tolerances.

    Validation never raises for a missing match; it records a failed verdict
    instead.
    """

    def __init__(self, tolerances: ToleranceConfig | None = None) -> None:
        self.tolerances = tolerances or ToleranceConfig()

    def find_match(
        self, expected: ExpectedComponent, actual: Sequence[Mapping[str, Any]]
    ) -> dict[str, Any] | None:
        """Return the first actual component matching the expected one.

        Candidates must share the type; when the fixture carries bounds the
        origin must also lie within 50px on each axis. Matches are not
        consumed, so two expectations may match the same component.
        """
        for component in actual:
            if component.get("type") != expected.type.value:
                continue
            if expected.bounds is not None:
                bounds = component.get("bounds") or {}
                dx = abs(bounds.get("x", 0) - expected.bounds.x)
                dy = abs(bounds.get("y", 0) - expected.bounds.y)
                if dx >= BOUNDS_MATCH_DISTANCE or dy >= BOUNDS_MATCH_DISTANCE:
                    continue
            return dict(component)
        return None

    def validate_component(
        self, expected: ExpectedComponent, actual: Mapping[str, Any]
    ) -> ComponentVerdict:
        verdict = ComponentVerdict(expected=expected, actual=dict(actual), passed=True)
        for name, expected_value in expected.properties.items():
            tolerance = self.tolerances.resolve(name, expected.tolerance)
            check = compare_property(expected_value, resolve_property(actual, name), tolerance)
            verdict.property_checks[name] = check
            if not check.valid:
                verdict.passed = False
        return verdict

    def validate(
        self,
        expected: Sequence[ExpectedComponent],
        actual: Sequence[DetectedComponent | Mapping[str, Any]],
        test_case_id: str = "adhoc",
    ) -> ValidationResult:
        """Validate actual components against expectations.

        Args:
            expected: Expected components from a fixture
            actual: Detected components, as objects or their JSON dicts
            test_case_id: Identifier recorded on the result

        Returns:
            ValidationResult with one verdict per expected component
        """
        candidates = [_as_dict(component) for component in actual]
        result = ValidationResult(test_case_id=test_case_id)

        for expected_component in expected:
            match = self.find_match(expected_component, candidates)
            if match is None:
                verdict = ComponentVerdict(
                    expected=expected_component, actual=None, passed=False, reason=NOT_DETECTED
                )
            else:
                verdict = self.validate_component(expected_component, match)

            result.details.append(verdict)
            if verdict.passed:
                result.passed += 1
            else:
                result.failed += 1

        total = result.passed + result.failed
        result.accuracy = result.passed / total * 100 if total > 0 else 0.0

        logger.debug(
            f"Validated {test_case_id}: {result.passed}/{total} passed "
            f"({result.accuracy:.1f}%)"
        )
        return result
