"""Detection and validation exceptions.

This module contains exceptions for invalid raster input, unavailable
external oracles (OCR, color quantization) and detection passes that
overrun their deadline.
"""

from .base_exceptions import UIExtractException


class InputError(UIExtractException):
    """Raised when caller-supplied input is unusable.

    Covers empty or malformed raster buffers, out-of-range regions and
    unreadable image files. Never retried.
    """

    def __init__(self, reason: str, **kwargs) -> None:
        """Initialize with the reason the input was rejected."""
        super().__init__(reason, error_code="INVALID_INPUT", context={"reason": reason, **kwargs})


class UnknownTestCaseError(InputError):
    """Raised when a validation run references a fixture id that does not exist."""

    def __init__(self, test_case_id: str, **kwargs) -> None:
        """Initialize with the missing test case id."""
        super().__init__(f"Test case {test_case_id} not found", test_case_id=test_case_id, **kwargs)
        self.error_code = "UNKNOWN_TEST_CASE"
        self.test_case_id = test_case_id


class OracleUnavailable(UIExtractException):
    """Raised by an external oracle that failed, timed out or is not installed.

    Always recovered locally by the caller with a documented fallback.
    """

    def __init__(self, oracle: str, reason: str, **kwargs) -> None:
        """Initialize with oracle name and failure reason."""
        super().__init__(
            f"{oracle} unavailable: {reason}",
            error_code="ORACLE_UNAVAILABLE",
            context={"oracle": oracle, "reason": reason, **kwargs},
        )
        self.oracle = oracle


class DetectionTimeout(UIExtractException):
    """Raised when a detection pass runs past its deadline."""

    def __init__(self, stage: str, timeout: float | None = None, **kwargs) -> None:
        """Initialize with the stage that was interrupted."""
        message = f"Detection timed out during {stage}"
        if timeout is not None:
            message += f" (limit {timeout:.1f}s)"
        super().__init__(
            message,
            error_code="DETECTION_TIMEOUT",
            context={"stage": stage, "timeout": timeout, **kwargs},
        )
        self.stage = stage
