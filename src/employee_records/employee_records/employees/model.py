from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, Optional, Sequence, TypeVar

from ..common.datetime_utils import today_local, whole_months_between, whole_years_between
from ..core.enums import Department, EmployeeStatus, SortDirection


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Plain data object; storage access lives in the repositories.
    """

    employee_id: int
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str]
    department: Department
    position: str
    salary: Decimal
    hire_date: date
    status: EmployeeStatus
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def tenure_in_years(self, today: Optional[date] = None) -> int:
        return whole_years_between(self.hire_date, today or today_local())

    def tenure_in_months(self, today: Optional[date] = None) -> int:
        return whole_months_between(self.hire_date, today or today_local())


@dataclass(frozen=True)
class EmployeeDraft:
    """Caller-supplied fields for create/update, before id and timestamps exist."""

    first_name: str
    last_name: str
    email: str
    department: Optional[Department]
    position: str
    salary: Optional[Decimal]
    hire_date: Optional[date]
    phone_number: Optional[str] = None
    status: Optional[EmployeeStatus] = None
    is_active: Optional[bool] = None


@dataclass(frozen=True)
class SortOrder:
    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


@dataclass(frozen=True)
class PageRequest:
    index: int = 0
    size: int = 10

    @property
    def offset(self) -> int:
        return self.index * self.size


T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    index: int
    size: int
    sort: Sequence[SortOrder] = field(default_factory=tuple)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index + 1 >= self.total_pages

    @property
    def has_next(self) -> bool:
        return self.index + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.index > 0 and self.total > 0


@dataclass(frozen=True)
class DepartmentActivity:
    """One grouped storage row: employees of a department sharing an active flag."""

    department: Department
    is_active: bool
    count: int
    salary_total: Decimal


@dataclass(frozen=True)
class DepartmentStats:
    count: int
    average_salary: Optional[Decimal]


@dataclass(frozen=True)
class EmployeeStatistics:
    total: int
    active: int
    inactive: int
    per_department: dict[Department, DepartmentStats]
