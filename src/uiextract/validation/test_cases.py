"""Built-in validation fixtures and the registry that serves them."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from ..detection_exceptions import InputError, UnknownTestCaseError
from .validation_types import TestCase

logger = logging.getLogger(__name__)

_BUILTIN_DATA: list[dict] = [
    {
        "id": "desktop_components",
        "name": "Desktop Multi-Component Interface",
        "description": "Various UI components on desktop viewport",
        "imagePath": "/test-images/desktop-components.png",
        "viewport": {"width": 1920, "height": 1080, "type": "desktop"},
        "expectedComponents": [
            {
                "type": "button",
                "properties": {
                    "backgroundColor": "#3B82F6",
                    "color": "#FFFFFF",
                    "borderRadius": 8,
                    "paddingX": 16,
                    "paddingY": 8,
                    "fontSize": 14,
                    "fontWeight": 500,
                },
                "tolerance": {
                    "backgroundColor": 10,
                    "borderRadius": 25,
                    "padding": 20,
                    "fontSize": 15,
                },
            },
            {
                "type": "card",
                "properties": {
                    "backgroundColor": "#FFFFFF",
                    "borderRadius": 12,
                    "padding": 24,
                    "shadow": "0 4px 6px rgba(0,0,0,0.1)",
                    "border": "1px solid #E5E7EB",
                },
            },
        ],
    },
    {
        "id": "button_states",
        "name": "Button State Variations",
        "description": "Default, hover, and active button states",
        "imagePath": "/test-images/button-states.png",
        "viewport": {"width": 800, "height": 400, "type": "tablet"},
        "expectedComponents": [
            {
                "type": "button",
                "state": "default",
                "properties": {"backgroundColor": "#3B82F6", "color": "#FFFFFF"},
            },
            {
                "type": "button",
                "state": "hover",
                "properties": {"backgroundColor": "#2563EB", "color": "#FFFFFF"},
            },
            {
                "type": "button",
                "state": "active",
                "properties": {"backgroundColor": "#1D4ED8", "color": "#FFFFFF"},
            },
        ],
    },
    {
        "id": "mobile_layout",
        "name": "Mobile Responsive Layout",
        "description": "Components adapted for mobile viewport",
        "imagePath": "/test-images/mobile-layout.png",
        "viewport": {"width": 375, "height": 667, "type": "mobile"},
        "expectedComponents": [
            {
                "type": "button",
                "properties": {"width": "100%", "paddingY": 12, "fontSize": 16},
            },
            {
                "type": "input",
                "properties": {
                    "width": "100%",
                    "paddingX": 12,
                    "paddingY": 8,
                    "borderRadius": 6,
                },
            },
        ],
    },
]

BUILTIN_TEST_CASES: tuple[TestCase, ...] = tuple(
    TestCase.model_validate(data) for data in _BUILTIN_DATA
)


class TestCaseRegistry:
    """Lookup of test cases by id."""

    __test__ = False

    def __init__(self, test_cases: Iterable[TestCase] | None = None):
        self._cases: dict[str, TestCase] = {}
        for test_case in BUILTIN_TEST_CASES if test_cases is None else test_cases:
            self.add(test_case)

    def add(self, test_case: TestCase) -> None:
        if test_case.id in self._cases:
            logger.warning(f"Replacing test case {test_case.id}")
        self._cases[test_case.id] = test_case

    def get(self, test_case_id: str) -> TestCase:
        try:
            return self._cases[test_case_id]
        except KeyError:
            raise UnknownTestCaseError(test_case_id) from None

    def ids(self) -> list[str]:
        return list(self._cases)

    def __iter__(self):
        return iter(self._cases.values())

    def __len__(self) -> int:
        return len(self._cases)

    def __contains__(self, test_case_id: object) -> bool:
        return test_case_id in self._cases

    @classmethod
    def from_json(cls, path: str | Path, include_builtins: bool = False) -> "TestCaseRegistry":
        """Load test cases from a JSON file.

        The file holds either a list of test cases or an object with a
        ``testCases`` list.

        Args:
            path: JSON fixture file
            include_builtins: Start from the built-in test cases

        Raises:
            InputError: If the file cannot be read or does not validate
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise InputError(f"Cannot read fixtures {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("testCases", [])
        if not isinstance(data, list):
            raise InputError(f"Fixtures {path} must contain a list of test cases")

        try:
            loaded = [TestCase.model_validate(item) for item in data]
        except ValidationError as e:
            raise InputError(f"Invalid fixtures in {path}: {e}") from e

        registry = cls() if include_builtins else cls([])
        for test_case in loaded:
            registry.add(test_case)
        logger.info(f"Loaded {len(loaded)} test cases from {path}")
        return registry
