from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ..core.constants import (
    EMAIL_MAX_LENGTH,
    MAX_SALARY,
    MIN_SALARY,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    POSITION_MAX_LENGTH,
)
from ..core.exceptions import FieldViolation

if TYPE_CHECKING:
    from ..employees.model import EmployeeDraft


EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?1?[-.\s]?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})$")


def check_required_text(value: Optional[str], field_name: str, *, min_len: int = 1, max_len: int) -> Optional[FieldViolation]:
    if value is None or not value.strip():
        return FieldViolation(field_name, "is required")
    length = len(value.strip())
    if length < min_len or length > max_len:
        if min_len > 1:
            return FieldViolation(field_name, f"must be between {min_len} and {max_len} characters")
        return FieldViolation(field_name, f"cannot exceed {max_len} characters")
    return None


def check_email(value: Optional[str]) -> Optional[FieldViolation]:
    if value is None or not value.strip():
        return FieldViolation("email", "is required")
    if len(value) > EMAIL_MAX_LENGTH:
        return FieldViolation("email", f"cannot exceed {EMAIL_MAX_LENGTH} characters")
    if not EMAIL_PATTERN.match(value):
        return FieldViolation("email", "must be a valid email address")
    return None


def check_phone_number(value: Optional[str]) -> Optional[FieldViolation]:
    # Empty phone numbers are allowed.
    if value is None or not value.strip():
        return None
    if not PHONE_PATTERN.match(value.strip()):
        return FieldViolation("phone_number", "must be a valid phone number")
    return None


def check_salary(value: Optional[Decimal]) -> Optional[FieldViolation]:
    if value is None:
        return FieldViolation("salary", "is required")
    value = Decimal(value)
    if not value.is_finite():
        return FieldViolation("salary", "must be a number")
    if value < MIN_SALARY or value > MAX_SALARY:
        return FieldViolation("salary", f"must be between {MIN_SALARY:,.0f} and {MAX_SALARY:,.0f}")
    return None


def check_hire_date(value: Optional[date], today: date) -> Optional[FieldViolation]:
    if value is None:
        return FieldViolation("hire_date", "is required")
    if value > today:
        return FieldViolation("hire_date", "cannot be in the future")
    return None


def validate_employee_draft(draft: "EmployeeDraft", *, today: date) -> list[FieldViolation]:
    """Run every field rule and collect the failures instead of stopping at the first."""

    checks = [
        check_required_text(draft.first_name, "first_name", min_len=NAME_MIN_LENGTH, max_len=NAME_MAX_LENGTH),
        check_required_text(draft.last_name, "last_name", min_len=NAME_MIN_LENGTH, max_len=NAME_MAX_LENGTH),
        check_email(draft.email),
        check_phone_number(draft.phone_number),
        None if draft.department is not None else FieldViolation("department", "is required"),
        check_required_text(draft.position, "position", max_len=POSITION_MAX_LENGTH),
        check_salary(draft.salary),
        check_hire_date(draft.hire_date, today),
    ]
    return [c for c in checks if c is not None]
