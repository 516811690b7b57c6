from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DepartmentActivity, Employee
from .query import EmployeeQuery, Predicate


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    Implementations raise ``UniqueConstraintError`` when storage rejects a duplicate email.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def exists_by_email(self, email: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def insert(self, employee: Employee) -> Employee:
        """Persist a new employee; the ``employee_id`` of the argument is ignored."""

        raise NotImplementedError

    def update(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def find(self, query: EmployeeQuery) -> Sequence[Employee]:
        """Ordered matches, restricted to ``query.page`` when one is set."""

        raise NotImplementedError

    def find_page(self, query: EmployeeQuery) -> tuple[Sequence[Employee], int]:
        """One page of matches plus the size of the full matching set."""

        raise NotImplementedError

    def count(self, predicate: Predicate) -> int:
        raise NotImplementedError

    def department_activity(self) -> Sequence[DepartmentActivity]:
        """Counts and salary totals grouped by (department, is_active)."""

        raise NotImplementedError
