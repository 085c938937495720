"""Tolerance-based validation of detected components against fixtures.

Usage:
    from uiextract.validation import ValidationSuite

    suite = ValidationSuite()
    result = suite.run_test_case("button_states", detection.components)
    print(result.accuracy)
"""

from .component_validator import ComponentValidator, resolve_property
from .test_cases import BUILTIN_TEST_CASES, TestCaseRegistry
from .tolerance import (
    ToleranceConfig,
    color_similarity,
    compare_property,
    numeric_deviation,
)
from .validation_suite import ValidationSuite, overall_accuracy
from .validation_types import (
    ComponentVerdict,
    ExpectedBounds,
    ExpectedComponent,
    PropertyCheck,
    TestCase,
    ValidationResult,
    Viewport,
)

__all__ = [
    "BUILTIN_TEST_CASES",
    "ComponentValidator",
    "ComponentVerdict",
    "ExpectedBounds",
    "ExpectedComponent",
    "PropertyCheck",
    "TestCase",
    "TestCaseRegistry",
    "ToleranceConfig",
    "ValidationResult",
    "ValidationSuite",
    "Viewport",
    "color_similarity",
    "compare_property",
    "numeric_deviation",
    "overall_accuracy",
    "resolve_property",
]
