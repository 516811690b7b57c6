from __future__ import annotations

from enum import Enum


class Department(str, Enum):
    """Closed set of departments, in declaration order."""

    IT = "IT"
    HR = "HR"
    FINANCE = "FINANCE"
    MARKETING = "MARKETING"
    OPERATIONS = "OPERATIONS"
    SALES = "SALES"

    @property
    def label(self) -> str:
        return _DEPARTMENT_LABELS[self]


class EmployeeStatus(str, Enum):
    """Employment status stored on every employee row."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"
    TERMINATED = "TERMINATED"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_DEPARTMENT_LABELS = {
    Department.IT: "Information Technology",
    Department.HR: "Human Resources",
    Department.FINANCE: "Finance",
    Department.MARKETING: "Marketing",
    Department.OPERATIONS: "Operations",
    Department.SALES: "Sales",
}

_STATUS_LABELS = {
    EmployeeStatus.ACTIVE: "Active",
    EmployeeStatus.INACTIVE: "Inactive",
    EmployeeStatus.ON_LEAVE: "On Leave",
    EmployeeStatus.TERMINATED: "Terminated",
}
