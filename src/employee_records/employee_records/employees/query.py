"""Composable filters, sort orders and page windows for employee queries.

A ``Predicate`` carries two equivalent renderings of one condition: a
parameterised SQL fragment for the MySQL repository and a Python test for the
in-memory repository. Optional filters contribute ``match_all()``, which
disappears when predicates are ANDed together.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..core.enums import Department, EmployeeStatus, SortDirection
from ..core.exceptions import InvalidQueryError
from .model import Employee, PageRequest, SortOrder

# attribute name -> column name
SORTABLE_FIELDS = {
    "employee_id": "employee_id",
    "first_name": "first_name",
    "last_name": "last_name",
    "email": "email",
    "department": "department",
    "position": "position",
    "salary": "salary",
    "hire_date": "hire_date",
    "status": "status",
    "is_active": "is_active",
    "created_at": "created_at",
    "updated_at": "updated_at",
}

KEYWORD_FIELDS = ("first_name", "last_name", "email", "position")

DEFAULT_SORT = (SortOrder("first_name"), SortOrder("last_name"))
TIE_BREAKER = SortOrder("employee_id")


@dataclass(frozen=True)
class Predicate:
    sql: str
    params: tuple
    test: Callable[[Employee], bool]
    is_identity: bool = False

    def __and__(self, other: "Predicate") -> "Predicate":
        return and_(self, other)

    def __or__(self, other: "Predicate") -> "Predicate":
        return or_(self, other)

    def __call__(self, employee: Employee) -> bool:
        return self.test(employee)


def match_all() -> Predicate:
    return Predicate("1=1", (), lambda e: True, is_identity=True)


def and_(*predicates: Predicate) -> Predicate:
    parts = [p for p in predicates if not p.is_identity]
    if not parts:
        return match_all()
    if len(parts) == 1:
        return parts[0]
    return Predicate(
        " AND ".join(f"({p.sql})" for p in parts),
        tuple(param for p in parts for param in p.params),
        lambda e: all(p.test(e) for p in parts),
    )


def or_(*predicates: Predicate) -> Predicate:
    if any(p.is_identity for p in predicates) or not predicates:
        return match_all()
    if len(predicates) == 1:
        return predicates[0]
    parts = list(predicates)
    return Predicate(
        " OR ".join(f"({p.sql})" for p in parts),
        tuple(param for p in parts for param in p.params),
        lambda e: any(p.test(e) for p in parts),
    )


def department_is(department: Department) -> Predicate:
    return Predicate("department=%s", (department.value,), lambda e: e.department == department)


def status_is(status: EmployeeStatus) -> Predicate:
    return Predicate("status=%s", (status.value,), lambda e: e.status == status)


def active_is(is_active: bool) -> Predicate:
    return Predicate("is_active=%s", (1 if is_active else 0,), lambda e: e.is_active == is_active)


def email_is(email: str) -> Predicate:
    return Predicate("email=%s", (email,), lambda e: e.email == email)


def id_is_not(employee_id: int) -> Predicate:
    return Predicate("employee_id<>%s", (int(employee_id),), lambda e: e.employee_id != int(employee_id))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_ignore_case(field_name: str, needle: str) -> Predicate:
    lowered = needle.lower()
    return Predicate(
        f"LOWER({field_name}) LIKE %s",
        (f"%{_escape_like(lowered)}%",),
        lambda e: lowered in (getattr(e, field_name) or "").lower(),
    )


def keyword_matches(keyword: Optional[str]) -> Predicate:
    """Case-insensitive substring match on names, email and position.

    A missing or blank keyword filters nothing.
    """
    if keyword is None or not keyword.strip():
        return match_all()
    needle = keyword.strip()
    return or_(*(contains_ignore_case(f, needle) for f in KEYWORD_FIELDS))


def salary_between(minimum: Decimal, maximum: Decimal) -> Predicate:
    return Predicate(
        "salary>=%s AND salary<=%s",
        (minimum, maximum),
        lambda e: minimum <= e.salary <= maximum,
    )


def hire_date_between(start: date, end: date) -> Predicate:
    return Predicate(
        "hire_date>=%s AND hire_date<=%s",
        (start, end),
        lambda e: start <= e.hire_date <= end,
    )


def optional(value, factory: Callable[..., Predicate]) -> Predicate:
    return match_all() if value is None else factory(value)


@dataclass(frozen=True)
class EmployeeQuery:
    """Predicate + sort + optional page window, usable for fetching and counting."""

    predicate: Predicate
    sort: tuple[SortOrder, ...] = DEFAULT_SORT
    page: Optional[PageRequest] = None

    @property
    def order_by(self) -> tuple[SortOrder, ...]:
        """The sort actually applied, with the id tie-breaker appended."""
        if any(s.field == TIE_BREAKER.field for s in self.sort):
            return self.sort
        return self.sort + (TIE_BREAKER,)


def parse_direction(value: Optional[str]) -> SortDirection:
    if value is None or not value.strip():
        return SortDirection.ASC
    try:
        return SortDirection(value.strip().lower())
    except ValueError:
        raise InvalidQueryError("sort_dir", value) from None


def sort_order(field_name: str, direction: SortDirection | str = SortDirection.ASC) -> SortOrder:
    name = field_name.strip()
    if name not in SORTABLE_FIELDS:
        raise InvalidQueryError("sort_by", field_name, f"Unsupported sort field: {field_name!r}")
    if not isinstance(direction, SortDirection):
        direction = parse_direction(direction)
    return SortOrder(name, direction)


def parse_sort(sort_by: Optional[str], sort_dir: Optional[str] = None) -> tuple[SortOrder, ...]:
    """Parse ``"first_name,last_name"`` plus one direction into sort orders."""
    if sort_by is None or not sort_by.strip():
        return DEFAULT_SORT
    direction = parse_direction(sort_dir)
    return tuple(sort_order(name, direction) for name in sort_by.split(",") if name.strip())


def page_request(index: int, size: int) -> PageRequest:
    if index < 0:
        raise InvalidQueryError("page", index, "Page index must not be negative")
    if size < 1:
        raise InvalidQueryError("size", size, "Page size must be at least 1")
    return PageRequest(index=int(index), size=int(size))


def build_employee_query(
    *,
    department: Optional[Department] = None,
    status: Optional[EmployeeStatus] = None,
    keyword: Optional[str] = None,
    sort: Optional[Sequence[SortOrder]] = None,
    page: Optional[PageRequest] = None,
) -> EmployeeQuery:
    predicate = and_(
        optional(department, department_is),
        optional(status, status_is),
        keyword_matches(keyword),
    )
    for order in sort or ():
        if order.field not in SORTABLE_FIELDS:
            raise InvalidQueryError("sort_by", order.field, f"Unsupported sort field: {order.field!r}")
    return EmployeeQuery(predicate=predicate, sort=tuple(sort) if sort else DEFAULT_SORT, page=page)
