"""
Configuration error raised when caller-supplied parameters are rejected.

The engine raises it at the point of assignment, before any state changes,
so the previously valid settings stay in effect.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..config.validation import ValidationError


class ConfigurationError(ValueError):
    """One or more configuration parameters failed validation."""

    def __init__(self, message: str, validation_errors: Optional[list["ValidationError"]] = None):
        self.validation_errors = list(validation_errors or [])
        if self.validation_errors:
            details = "; ".join(
                f"{err.field}: {err.message} (got: {err.value!r})" for err in self.validation_errors
            )
            message = f"{message}: {details}"
        super().__init__(message)
        self.recoverable = True

    @property
    def fields(self) -> list[str]:
        """Names of the rejected parameters."""
        return [err.field for err in self.validation_errors]
