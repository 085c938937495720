"""Run fixture test cases and aggregate their accuracy."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..model import DetectedComponent
from .component_validator import ComponentValidator
from .test_cases import TestCaseRegistry
from .validation_types import ValidationResult

logger = logging.getLogger(__name__)

Components = Sequence[DetectedComponent | Mapping[str, Any]]


def overall_accuracy(results: Iterable[ValidationResult]) -> float:
    """Mean of per-test-case accuracies, 0 when there are none."""
    accuracies = [result.accuracy for result in results]
    if not accuracies:
        return 0.0
    return sum(accuracies) / len(accuracies)


class ValidationSuite:
    """Validate detections against registered test cases.

    Keeps the latest result per test case; aggregates are recomputed from
    those on every query.
    """

    def __init__(
        self,
        registry: TestCaseRegistry | None = None,
        validator: ComponentValidator | None = None,
    ):
        self.registry = registry or TestCaseRegistry()
        self.validator = validator or ComponentValidator()
        self._results: dict[str, ValidationResult] = {}

    def run_test_case(self, test_case_id: str, components: Components) -> ValidationResult:
        """Validate components against one test case.

        Raises:
            UnknownTestCaseError: If the id is not registered
        """
        test_case = self.registry.get(test_case_id)
        result = self.validator.validate(
            test_case.expected_components, components, test_case_id=test_case.id
        )
        self._results[test_case.id] = result
        logger.info(
            f"Test case {test_case.id}: {result.passed} passed, {result.failed} failed, "
            f"accuracy {result.accuracy:.1f}%"
        )
        return result

    def run_all(self, components_by_case: Mapping[str, Components]) -> list[ValidationResult]:
        """Run every registered test case.

        Test cases without components in the mapping are validated against
        an empty detection.
        """
        return [
            self.run_test_case(test_case.id, components_by_case.get(test_case.id, []))
            for test_case in self.registry
        ]

    @property
    def results(self) -> list[ValidationResult]:
        return list(self._results.values())

    @property
    def overall_accuracy(self) -> float:
        return overall_accuracy(self._results.values())

    def summary(self) -> dict[str, Any]:
        results = self.results
        return {
            "testCases": len(results),
            "passed": sum(result.passed for result in results),
            "failed": sum(result.failed for result in results),
            "overallAccuracy": self.overall_accuracy,
        }

    def clear(self) -> None:
        self._results.clear()
