from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when an identifier does not resolve to a stored employee."""

    def __init__(self, employee_id: int):
        super().__init__(f"Employee not found with id: {employee_id}")
        self.employee_id = employee_id


class DuplicateEmailError(DomainError):
    """Raised when an email is already used by another employee."""

    def __init__(self, email: str):
        super().__init__(f"Employee with email '{email}' already exists")
        self.email = email


class InvalidRangeError(DomainError):
    """Raised when a caller supplies a lower bound above the upper bound."""

    def __init__(self, field: str, lower: Any, upper: Any):
        super().__init__(f"Invalid {field} range: {lower} is greater than {upper}")
        self.field = field
        self.lower = lower
        self.upper = upper


class InvalidQueryError(DomainError):
    """Raised for unsupported sort fields or malformed filter/page parameters."""

    def __init__(self, parameter: str, value: Any, reason: str | None = None):
        message = reason or f"Unsupported value for '{parameter}': {value!r}"
        super().__init__(message)
        self.parameter = parameter
        self.value = value


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(DomainError):
    """Raised when a draft breaks one or more field rules."""

    def __init__(self, violations: Sequence[FieldViolation]):
        self.violations = list(violations)
        super().__init__("Validation failed: " + "; ".join(str(v) for v in self.violations))


class UniqueConstraintError(Exception):
    """Raised by repositories when storage rejects a duplicate unique key."""

    def __init__(self, column: str, value: Any):
        super().__init__(f"Duplicate value for {column}: {value!r}")
        self.column = column
        self.value = value
