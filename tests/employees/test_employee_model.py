from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.employee_records.employee_records.common.datetime_utils import whole_months_between
from src.employee_records.employee_records.core.enums import Department, EmployeeStatus
from src.employee_records.employee_records.employees.model import Employee, Page


def _employee(hire_date: date) -> Employee:
    stamp = datetime(2020, 1, 1)
    return Employee(
        employee_id=1,
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@company.com",
        phone_number=None,
        department=Department.HR,
        position="Recruiter",
        salary=Decimal("55000"),
        hire_date=hire_date,
        status=EmployeeStatus.ACTIVE,
        is_active=True,
        created_at=stamp,
        updated_at=stamp,
    )


def test_full_name_joins_first_and_last():
    assert _employee(date(2020, 1, 1)).full_name == "Jane Doe"


def test_tenure_counts_whole_years_and_months():
    e = _employee(date(2020, 3, 15))

    assert e.tenure_in_years(date(2023, 3, 14)) == 2
    assert e.tenure_in_years(date(2023, 3, 15)) == 3
    assert e.tenure_in_months(date(2020, 5, 14)) == 1


def test_hired_today_has_zero_tenure():
    e = _employee(date(2024, 6, 1))

    assert e.tenure_in_years(date(2024, 6, 1)) == 0
    assert e.tenure_in_months(date(2024, 6, 1)) == 0


@pytest.mark.parametrize(
    "start,end,months",
    [
        (date(2024, 1, 31), date(2024, 2, 29), 0),
        (date(2024, 1, 15), date(2024, 2, 15), 1),
        (date(2023, 12, 20), date(2024, 12, 19), 11),
    ],
)
def test_whole_months_between(start, end, months):
    assert whole_months_between(start, end) == months


def test_page_navigation_flags():
    page = Page(items=[], total=25, index=2, size=10)

    assert page.total_pages == 3
    assert page.is_last and not page.has_next
    assert page.has_previous and not page.is_first


def test_empty_page():
    page = Page(items=[], total=0, index=0, size=10)

    assert page.total_pages == 0
    assert not page.has_next
    assert not page.has_previous
