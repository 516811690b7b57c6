from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..core.exceptions import UniqueConstraintError
from .model import DepartmentActivity, Employee
from .query import EmployeeQuery, Predicate


# Binary collation in the schema; every other text column compares case-insensitively.
CASE_SENSITIVE_FIELDS = frozenset({"email"})


def _sort_key(field_name: str, value):
    if isinstance(value, str) and field_name not in CASE_SENSITIVE_FIELDS:
        return value.casefold()
    return value


class InMemoryEmployeeRepository:
    """Dict-backed repository evaluating the same predicates as the SQL one."""

    def __init__(self, employees: Iterable[Employee] = ()):
        self._rows: dict[int, Employee] = {}
        self._next_id = 1
        for e in employees:
            self._rows[e.employee_id] = e
            self._next_id = max(self._next_id, e.employee_id + 1)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._rows.get(int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        for e in self._rows.values():
            if e.email == email:
                return e
        return None

    def exists_by_email(self, email: str, *, exclude_id: Optional[int] = None) -> bool:
        return any(
            e.email == email and (exclude_id is None or e.employee_id != int(exclude_id))
            for e in self._rows.values()
        )

    def insert(self, employee: Employee) -> Employee:
        if self.exists_by_email(employee.email):
            raise UniqueConstraintError("email", employee.email)
        stored = replace(employee, employee_id=self._next_id)
        self._rows[stored.employee_id] = stored
        self._next_id += 1
        return stored

    def update(self, employee: Employee) -> Employee:
        if employee.employee_id not in self._rows:
            raise KeyError(employee.employee_id)
        if self.exists_by_email(employee.email, exclude_id=employee.employee_id):
            raise UniqueConstraintError("email", employee.email)
        self._rows[employee.employee_id] = employee
        return employee

    def _ordered_matches(self, query: EmployeeQuery) -> list[Employee]:
        rows = [e for e in self._rows.values() if query.predicate(e)]
        # Stable sorts applied from the least significant key upwards.
        for order in reversed(query.order_by):
            rows.sort(key=lambda e: _sort_key(order.field, getattr(e, order.field)), reverse=order.descending)
        return rows

    def find(self, query: EmployeeQuery) -> Sequence[Employee]:
        rows = self._ordered_matches(query)
        if query.page is None:
            return rows
        return rows[query.page.offset:query.page.offset + query.page.size]

    def find_page(self, query: EmployeeQuery) -> tuple[Sequence[Employee], int]:
        rows = self._ordered_matches(query)
        if query.page is None:
            return rows, len(rows)
        return rows[query.page.offset:query.page.offset + query.page.size], len(rows)

    def count(self, predicate: Predicate) -> int:
        return sum(1 for e in self._rows.values() if predicate(e))

    def department_activity(self) -> Sequence[DepartmentActivity]:
        groups: dict[tuple, list[Employee]] = {}
        for e in self._rows.values():
            groups.setdefault((e.department, e.is_active), []).append(e)
        return [
            DepartmentActivity(
                department=dept,
                is_active=active,
                count=len(members),
                salary_total=sum((m.salary for m in members), Decimal("0")),
            )
            for (dept, active), members in groups.items()
        ]
