from __future__ import annotations

from days.core.exceptions import ConflictError, ValidationAppError


class InvalidFormatError(ValidationAppError):
    """A value has the wrong shape, e.g. a malformed date or color."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid {field} format", details={"field": field})
        self.field = field


class InvalidValueError(ValidationAppError):
    """A value is well formed but not acceptable (empty, too long, missing)."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid {field} value", details={"field": field})
        self.field = field


class AlreadyExistsError(ConflictError):
    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else None)
        self.field = field
