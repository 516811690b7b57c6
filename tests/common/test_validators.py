from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.employee_records.employee_records.common.validators import (
    check_email,
    check_hire_date,
    check_phone_number,
    check_required_text,
    check_salary,
    validate_employee_draft,
)
from src.employee_records.employee_records.core.enums import Department
from src.employee_records.employee_records.employees.model import EmployeeDraft

TODAY = date(2026, 1, 15)


def _draft(**overrides) -> EmployeeDraft:
    values = dict(
        first_name="Maria",
        last_name="Green",
        email="maria.green@company.com",
        department=Department.IT,
        position="Backend Developer",
        salary=Decimal("80000"),
        hire_date=date(2021, 11, 3),
    )
    values.update(overrides)
    return EmployeeDraft(**values)


def test_valid_draft_has_no_violations():
    assert validate_employee_draft(_draft(), today=TODAY) == []


def test_missing_department_and_position_are_reported():
    violations = validate_employee_draft(_draft(department=None, position="  "), today=TODAY)

    assert [v.field for v in violations] == ["department", "position"]


@pytest.mark.parametrize("name", ["A", "x" * 51, "", "   "])
def test_name_length_bounds(name):
    assert check_required_text(name, "first_name", min_len=2, max_len=50) is not None


@pytest.mark.parametrize("name", ["Al", "x" * 50])
def test_name_at_bounds_is_accepted(name):
    assert check_required_text(name, "first_name", min_len=2, max_len=50) is None


@pytest.mark.parametrize("email", ["plain", "a@b", "a b@company.com", "@company.com", None])
def test_bad_email_shapes(email):
    assert check_email(email) is not None


def test_overlong_email():
    violation = check_email("x" * 90 + "@company.com")

    assert violation is not None
    assert "100" in violation.message


@pytest.mark.parametrize("phone", [None, "", "555-123-4567", "(555) 123-4567", "+1 555.123.4567", "5551234567"])
def test_phone_formats_accepted(phone):
    assert check_phone_number(phone) is None


@pytest.mark.parametrize("phone", ["12345", "555-1234-567", "phone"])
def test_phone_formats_rejected(phone):
    assert check_phone_number(phone).field == "phone_number"


@pytest.mark.parametrize(
    "salary,ok",
    [
        (Decimal("20000"), True),
        (Decimal("500000"), True),
        (Decimal("19999.99"), False),
        (Decimal("500000.01"), False),
        (None, False),
    ],
)
def test_salary_bounds_are_inclusive(salary, ok):
    assert (check_salary(salary) is None) is ok


def test_hire_date_today_is_allowed_but_tomorrow_is_not():
    assert check_hire_date(TODAY, TODAY) is None
    assert check_hire_date(date(2026, 1, 16), TODAY).message == "cannot be in the future"


@pytest.mark.parametrize("salary", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
def test_non_finite_salary_is_a_violation(salary):
    assert check_salary(salary).message == "must be a number"
