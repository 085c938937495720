"""Root of the uiextract exception hierarchy.

Every error carries a stable code and a context dictionary so that the CLI
can report failures as JSON as well as text.
"""

from typing import Any


class UIExtractException(Exception):
    """Base exception for all uiextract errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            error_code: Optional error code
            context: Optional context dictionary
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready description for machine-readable error output.

        Context values that are not JSON types are rendered with ``str``.
        """
        return {
            "error": type(self).__name__,
            "code": self.error_code,
            "message": self.message,
            "context": {key: _json_value(value) for key, value in self.context.items()},
        }


def _json_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _json_value(item) for key, item in value.items()}
    return str(value)
