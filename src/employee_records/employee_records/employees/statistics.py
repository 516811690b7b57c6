from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..core.enums import Department
from .model import DepartmentStats, EmployeeStatistics
from .repository import EmployeeRepository

CENT = Decimal("0.01")


def average(total: Decimal, count: int) -> Optional[Decimal]:
    if count == 0:
        return None
    return (Decimal(total) / count).quantize(CENT, rounding=ROUND_HALF_UP)


class EmployeeStatisticsService:
    """Aggregates computed fresh from storage on every call.

    All figures come from one grouped read, so the totals and the per-department
    breakdown describe the same snapshot of the table.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def snapshot(self) -> EmployeeStatistics:
        rows = self._employees.department_activity()

        active = sum(r.count for r in rows if r.is_active)
        inactive = sum(r.count for r in rows if not r.is_active)

        per_department: dict[Department, DepartmentStats] = {}
        for dept in Department:
            dept_rows = [r for r in rows if r.department == dept and r.is_active]
            count = sum(r.count for r in dept_rows)
            total = sum((Decimal(r.salary_total) for r in dept_rows), Decimal("0"))
            per_department[dept] = DepartmentStats(count=count, average_salary=average(total, count))

        return EmployeeStatistics(
            total=active + inactive,
            active=active,
            inactive=inactive,
            per_department=per_department,
        )

    def count_by_department(self) -> dict[Department, int]:
        """Head count per department, active and inactive alike."""
        counts = {dept: 0 for dept in Department}
        for r in self._employees.department_activity():
            counts[r.department] += r.count
        return counts

    def total_salary_by_department(self) -> dict[Department, Decimal]:
        totals = {dept: Decimal("0") for dept in Department}
        for r in self._employees.department_activity():
            if r.is_active:
                totals[r.department] += Decimal(r.salary_total)
        return totals
