from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.logging import get_logger
from ..common.validators import validate_employee_draft
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Department, EmployeeStatus, SortDirection
from ..core.exceptions import (
    DuplicateEmailError,
    InvalidQueryError,
    InvalidRangeError,
    NotFoundError,
    UniqueConstraintError,
    ValidationError,
)
from .model import Employee, EmployeeDraft, EmployeeStatistics, Page, PageRequest, SortOrder
from .query import (
    DEFAULT_SORT,
    EmployeeQuery,
    active_is,
    and_,
    build_employee_query,
    department_is,
    hire_date_between,
    keyword_matches,
    match_all,
    salary_between,
    status_is,
)
from .repository import EmployeeRepository
from .statistics import EmployeeStatisticsService

logger = get_logger(__name__)


class EmployeeService:
    """Use cases: create/update/soft-delete employees and query them."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        statistics: Optional[EmployeeStatisticsService] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._statistics = statistics or EmployeeStatisticsService(employees)
        self._clock = clock

    # -------- Mutations --------
    def _validate(self, draft: EmployeeDraft, now: datetime) -> None:
        violations = validate_employee_draft(draft, today=now.date())
        if violations:
            raise ValidationError(violations)

    def create(self, draft: EmployeeDraft) -> Employee:
        logger.info("employee_create_requested", email=draft.email)
        now = self._clock()
        self._validate(draft, now)

        if self._employees.exists_by_email(draft.email):
            raise DuplicateEmailError(draft.email)

        employee = Employee(
            employee_id=0,
            first_name=draft.first_name.strip(),
            last_name=draft.last_name.strip(),
            email=draft.email,
            phone_number=(draft.phone_number or "").strip() or None,
            department=draft.department,
            position=draft.position.strip(),
            salary=Decimal(draft.salary),
            hire_date=draft.hire_date,
            status=draft.status or EmployeeStatus.ACTIVE,
            is_active=True if draft.is_active is None else bool(draft.is_active),
            created_at=now,
            updated_at=now,
        )
        try:
            saved = self._employees.insert(employee)
        except UniqueConstraintError:
            # Another writer won the race between the pre-check and the insert.
            raise DuplicateEmailError(draft.email) from None

        logger.info("employee_created", employee_id=saved.employee_id, email=saved.email)
        return saved

    def update(self, employee_id: int, draft: EmployeeDraft) -> Employee:
        logger.info("employee_update_requested", employee_id=employee_id)
        existing = self.get_by_id(employee_id)
        now = self._clock()
        self._validate(draft, now)

        if draft.email != existing.email and self._employees.exists_by_email(draft.email, exclude_id=existing.employee_id):
            raise DuplicateEmailError(draft.email)

        changed = replace(
            existing,
            first_name=draft.first_name.strip(),
            last_name=draft.last_name.strip(),
            email=draft.email,
            phone_number=(draft.phone_number or "").strip() or None,
            department=draft.department,
            position=draft.position.strip(),
            salary=Decimal(draft.salary),
            hire_date=draft.hire_date,
            status=draft.status or existing.status,
            is_active=existing.is_active if draft.is_active is None else bool(draft.is_active),
            updated_at=max(now, existing.updated_at),
        )
        try:
            saved = self._employees.update(changed)
        except UniqueConstraintError:
            raise DuplicateEmailError(draft.email) from None

        logger.info("employee_updated", employee_id=saved.employee_id)
        return saved

    def soft_delete(self, employee_id: int) -> None:
        """Terminate an employee without removing the row. Repeating it is harmless."""
        existing = self.get_by_id(employee_id)
        if not existing.is_active and existing.status == EmployeeStatus.TERMINATED:
            logger.info("employee_already_terminated", employee_id=existing.employee_id)
            return

        self._employees.update(
            replace(
                existing,
                is_active=False,
                status=EmployeeStatus.TERMINATED,
                updated_at=max(self._clock(), existing.updated_at),
            )
        )
        logger.info("employee_soft_deleted", employee_id=existing.employee_id)

    # -------- Lookups --------
    def get_by_id(self, employee_id: int) -> Employee:
        logger.debug("employee_fetch", employee_id=employee_id)
        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(employee_id)
        return employee

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._employees.get_by_email(email)

    def email_is_unique(self, email: str, exclude_id: Optional[int] = None) -> bool:
        return not self._employees.exists_by_email(email, exclude_id=exclude_id)

    # -------- Pages --------
    def _page(self, query: EmployeeQuery) -> Page[Employee]:
        items, total = self._employees.find_page(query)
        page = query.page or PageRequest(0, max(total, 1))
        return Page(items=list(items), total=total, index=page.index, size=page.size, sort=query.sort)

    def list_with_filters(
        self,
        *,
        department: Optional[Department] = None,
        status: Optional[EmployeeStatus] = None,
        keyword: Optional[str] = None,
        sort: Optional[Sequence[SortOrder]] = None,
        page: Optional[PageRequest] = None,
    ) -> Page[Employee]:
        logger.debug("employee_filter", department=department, status=status, keyword=keyword)
        query = build_employee_query(
            department=department,
            status=status,
            keyword=keyword,
            sort=sort,
            page=page or PageRequest(0, DEFAULT_PAGE_SIZE),
        )
        return self._page(query)

    def list_all(self, *, sort: Optional[Sequence[SortOrder]] = None, page: Optional[PageRequest] = None) -> Page[Employee]:
        return self.list_with_filters(sort=sort, page=page)

    def search_paginated(self, keyword: Optional[str], *, page: Optional[PageRequest] = None) -> Page[Employee]:
        return self.list_with_filters(keyword=keyword, page=page)

    # -------- Lists --------
    def search(self, keyword: Optional[str]) -> list[Employee]:
        logger.debug("employee_search", keyword=keyword)
        if keyword is None or not keyword.strip():
            return self.list_active()
        return list(self._employees.find(EmployeeQuery(keyword_matches(keyword), DEFAULT_SORT)))

    def list_active(self) -> list[Employee]:
        return list(self._employees.find(EmployeeQuery(active_is(True), DEFAULT_SORT)))

    def list_by_department(self, department: Department) -> list[Employee]:
        return list(self._employees.find(EmployeeQuery(department_is(department), DEFAULT_SORT)))

    def list_by_status(self, status: EmployeeStatus) -> list[Employee]:
        return list(self._employees.find(EmployeeQuery(status_is(status), DEFAULT_SORT)))

    def list_by_salary_range(self, min_salary: Optional[Decimal], max_salary: Optional[Decimal]) -> list[Employee]:
        if min_salary is None or max_salary is None:
            raise InvalidQueryError("salary", None, "Minimum and maximum salary are required")
        min_salary, max_salary = Decimal(min_salary), Decimal(max_salary)
        if not (min_salary.is_finite() and max_salary.is_finite()):
            raise InvalidQueryError("salary", (min_salary, max_salary), "Salary bounds must be finite numbers")
        if min_salary > max_salary:
            raise InvalidRangeError("salary", min_salary, max_salary)
        query = EmployeeQuery(
            and_(salary_between(min_salary, max_salary), active_is(True)),
            (SortOrder("salary", SortDirection.DESC),),
        )
        return list(self._employees.find(query))

    def list_by_hire_date_range(self, start: Optional[date], end: Optional[date]) -> list[Employee]:
        if start is None or end is None:
            raise InvalidQueryError("hire_date", None, "Start date and end date are required")
        if start > end:
            raise InvalidRangeError("hire_date", start, end)
        query = EmployeeQuery(
            and_(hire_date_between(start, end), active_is(True)),
            (SortOrder("hire_date"),),
        )
        return list(self._employees.find(query))

    def top_paid(self, limit: int) -> list[Employee]:
        if limit < 1:
            raise InvalidQueryError("limit", limit, "Limit must be at least 1")
        query = EmployeeQuery(match_all(), (SortOrder("salary", SortDirection.DESC),), PageRequest(0, int(limit)))
        return list(self._employees.find(query))

    # -------- Aggregates --------
    def statistics(self) -> EmployeeStatistics:
        logger.debug("employee_statistics")
        return self._statistics.snapshot()

    def count_by_department(self) -> dict[Department, int]:
        return self._statistics.count_by_department()

    def total_salary_by_department(self) -> dict[Department, Decimal]:
        return self._statistics.total_salary_by_department()
