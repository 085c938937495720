"""Type definitions for component validation.

Fixtures (expected components and test cases) are pydantic models so they
can be loaded from JSON and validated; results are plain dataclasses.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..model import ComponentType


class ExpectedBounds(BaseModel):
    """Approximate position of an expected component."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int | None = None
    height: int | None = None


class ExpectedComponent(BaseModel):
    """A hand-authored expected component."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    type: ComponentType
    """Component type the detection must report."""

    state: str | None = None
    """Interaction state the fixture describes (informational)."""

    bounds: ExpectedBounds | None = None
    """When set, the match must lie within 50px on both axes."""

    properties: dict[str, Any] = Field(default_factory=dict)
    """Property name (dotted paths allowed) to expected value."""

    tolerance: dict[str, float] = Field(default_factory=dict)
    """Per-property tolerance overrides."""

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    type: str = "desktop"


class TestCase(BaseModel):
    """A named set of expected components for one reference image."""

    __test__ = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = ""
    description: str = ""
    image_path: str | None = Field(default=None, alias="imagePath")
    viewport: Viewport | None = None
    expected_components: list[ExpectedComponent] = Field(
        default_factory=list, alias="expectedComponents"
    )


@dataclass
class PropertyCheck:
    """Comparison of one property.

    ``deviation`` is infinite when a non-zero value was measured against an
    expected 0; ``to_dict`` reports that case as ``None``.
    """

    expected: Any
    actual: Any
    tolerance: float
    valid: bool
    deviation: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected": self.expected,
            "actual": self.actual,
            "tolerance": self.tolerance,
            "valid": self.valid,
            "deviation": self.deviation if math.isfinite(self.deviation) else None,
        }


@dataclass
class ComponentVerdict:
    """Verdict for one expected component."""

    expected: ExpectedComponent
    actual: dict[str, Any] | None
    passed: bool
    reason: str | None = None
    property_checks: dict[str, PropertyCheck] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "expected": self.expected.to_dict(),
            "actual": self.actual,
            "passed": self.passed,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        if self.property_checks:
            data["propertyValidations"] = {
                name: check.to_dict() for name, check in self.property_checks.items()
            }
        return data


@dataclass
class ValidationResult:
    """Result of validating one test case."""

    test_case_id: str
    passed: int = 0
    failed: int = 0
    accuracy: float = 0.0
    details: list[ComponentVerdict] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "testCaseId": self.test_case_id,
            "passed": self.passed,
            "failed": self.failed,
            "accuracy": self.accuracy,
            "details": [detail.to_dict() for detail in self.details],
        }
