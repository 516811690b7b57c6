"""Conversion between JSON payloads and employee domain objects."""
from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Department, EmployeeStatus
from ..core.exceptions import FieldViolation, ValidationError
from .model import Employee, EmployeeDraft, EmployeeStatistics, Page


def _text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def draft_from_payload(data: Mapping[str, Any]) -> EmployeeDraft:
    """Coerce a JSON object into a draft.

    Values that cannot be converted are collected as violations; rule checks
    (lengths, ranges, formats) are left to the validators.
    """
    violations: list[FieldViolation] = []

    department: Optional[Department] = None
    if data.get("department") not in (None, ""):
        try:
            department = Department(str(data["department"]).upper())
        except ValueError:
            violations.append(FieldViolation("department", f"unknown department {data['department']!r}"))

    status: Optional[EmployeeStatus] = None
    if data.get("status") not in (None, ""):
        try:
            status = EmployeeStatus(str(data["status"]).upper())
        except ValueError:
            violations.append(FieldViolation("status", f"unknown status {data['status']!r}"))

    salary: Optional[Decimal] = None
    if data.get("salary") not in (None, ""):
        try:
            salary = Decimal(str(data["salary"]))
            if not salary.is_finite():
                raise InvalidOperation
        except InvalidOperation:
            salary = None
            violations.append(FieldViolation("salary", "must be a number"))

    hire_date: Optional[date] = None
    if data.get("hire_date") not in (None, ""):
        try:
            hire_date = parse_iso_date(str(data["hire_date"]))
        except ValueError:
            violations.append(FieldViolation("hire_date", "must be a date in YYYY-MM-DD format"))

    is_active = data.get("is_active")
    if is_active is not None and not isinstance(is_active, bool):
        violations.append(FieldViolation("is_active", "must be true or false"))
        is_active = None

    if violations:
        raise ValidationError(violations)

    return EmployeeDraft(
        first_name=_text(data, "first_name") or "",
        last_name=_text(data, "last_name") or "",
        email=(_text(data, "email") or "").strip(),
        department=department,
        position=_text(data, "position") or "",
        salary=salary,
        hire_date=hire_date,
        phone_number=_text(data, "phone_number"),
        status=status,
        is_active=is_active,
    )


def employee_to_dict(e: Employee) -> dict:
    return {
        "employee_id": e.employee_id,
        "first_name": e.first_name,
        "last_name": e.last_name,
        "full_name": e.full_name,
        "email": e.email,
        "phone_number": e.phone_number,
        "department": e.department.value,
        "department_label": e.department.label,
        "position": e.position,
        "salary": float(e.salary),
        "hire_date": e.hire_date.isoformat(),
        "status": e.status.value,
        "status_label": e.status.label,
        "is_active": e.is_active,
        "tenure_years": e.tenure_in_years(),
        "tenure_months": e.tenure_in_months(),
        "created_at": e.created_at.isoformat(timespec="seconds"),
        "updated_at": e.updated_at.isoformat(timespec="seconds"),
    }


def page_to_dict(page: Page[Employee]) -> dict:
    return {
        "items": [employee_to_dict(e) for e in page.items],
        "total": page.total,
        "page": page.index,
        "size": page.size,
        "total_pages": page.total_pages,
        "has_next": page.has_next,
        "has_previous": page.has_previous,
        "is_first": page.is_first,
        "is_last": page.is_last,
        "sort": [{"field": s.field, "direction": s.direction.value} for s in page.sort],
    }


def statistics_to_dict(stats: EmployeeStatistics) -> dict:
    return {
        "total": stats.total,
        "active": stats.active,
        "inactive": stats.inactive,
        "per_department": {
            dept.value: {
                "count": d.count,
                "avg_salary": None if d.average_salary is None else float(d.average_salary),
            }
            for dept, d in stats.per_department.items()
        },
    }
