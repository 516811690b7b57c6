from __future__ import annotations

from datetime import date
from decimal import Decimal

from ..common.logging import get_logger
from ..core.enums import Department, EmployeeStatus
from .model import EmployeeDraft
from .query import match_all
from .repository import EmployeeRepository
from .service import EmployeeService

logger = get_logger(__name__)

# (first, last, phone, department, position, salary, hire date, status)
_SAMPLES = [
    ("John", "Smith", "+1-555-010-1234", Department.IT, "Senior Software Engineer", "95000", date(2020, 3, 15), EmployeeStatus.ACTIVE),
    ("Sarah", "Johnson", "+1-555-010-2345", Department.IT, "Software Engineer", "75000", date(2021, 6, 20), EmployeeStatus.ACTIVE),
    ("Michael", "Brown", "+1-555-010-3456", Department.IT, "DevOps Engineer", "85000", date(2019, 11, 8), EmployeeStatus.ACTIVE),
    ("Emily", "Davis", "+1-555-010-4567", Department.IT, "QA Engineer", "70000", date(2022, 1, 10), EmployeeStatus.ACTIVE),
    ("David", "Wilson", "+1-555-010-5678", Department.IT, "System Administrator", "80000", date(2018, 9, 12), EmployeeStatus.ON_LEAVE),
    ("Lisa", "Anderson", "+1-555-020-1234", Department.HR, "HR Manager", "75000", date(2019, 4, 5), EmployeeStatus.ACTIVE),
    ("Robert", "Taylor", "+1-555-020-2345", Department.HR, "HR Specialist", "60000", date(2021, 2, 18), EmployeeStatus.ACTIVE),
    ("Jennifer", "Martinez", "+1-555-020-3456", Department.HR, "Recruiter", "55000", date(2022, 7, 25), EmployeeStatus.ACTIVE),
    ("William", "Garcia", "+1-555-030-1234", Department.FINANCE, "Finance Manager", "90000", date(2018, 12, 3), EmployeeStatus.ACTIVE),
    ("Amanda", "Rodriguez", "+1-555-030-2345", Department.FINANCE, "Financial Analyst", "65000", date(2020, 8, 14), EmployeeStatus.ACTIVE),
    ("Christopher", "Lee", "+1-555-030-3456", Department.FINANCE, "Accountant", "60000", date(2021, 3, 22), EmployeeStatus.ACTIVE),
    ("Jessica", "White", "+1-555-040-1234", Department.MARKETING, "Marketing Director", "95000", date(2019, 1, 15), EmployeeStatus.ACTIVE),
    ("Daniel", "Clark", "+1-555-040-2345", Department.MARKETING, "Marketing Specialist", "65000", date(2020, 5, 30), EmployeeStatus.ACTIVE),
    ("Ashley", "Lewis", "+1-555-040-3456", Department.MARKETING, "Content Creator", "55000", date(2022, 3, 8), EmployeeStatus.ACTIVE),
    ("Matthew", "Hall", "+1-555-050-1234", Department.OPERATIONS, "Operations Manager", "85000", date(2018, 6, 10), EmployeeStatus.ACTIVE),
    ("Nicole", "Young", "+1-555-050-2345", Department.OPERATIONS, "Operations Coordinator", "55000", date(2021, 9, 5), EmployeeStatus.ACTIVE),
    ("Kevin", "King", "+1-555-050-3456", Department.OPERATIONS, "Process Analyst", "70000", date(2020, 12, 18), EmployeeStatus.ACTIVE),
    ("Stephanie", "Wright", "+1-555-060-1234", Department.SALES, "Sales Manager", "85000", date(2019, 7, 22), EmployeeStatus.ACTIVE),
    ("Andrew", "Lopez", "+1-555-060-2345", Department.SALES, "Sales Representative", "60000", date(2021, 4, 12), EmployeeStatus.ACTIVE),
    ("Rachel", "Hill", "+1-555-060-3456", Department.SALES, "Account Executive", "65000", date(2020, 10, 28), EmployeeStatus.ACTIVE),
    ("Thomas", "Scott", "+1-555-010-6789", Department.IT, "Frontend Developer", "75000", date(2022, 5, 15), EmployeeStatus.ACTIVE),
    ("Maria", "Green", "+1-555-010-7890", Department.IT, "Backend Developer", "80000", date(2021, 11, 3), EmployeeStatus.ACTIVE),
    ("James", "Adams", "+1-555-010-8901", Department.IT, "Mobile Developer", "78000", date(2022, 2, 20), EmployeeStatus.ACTIVE),
    ("Patricia", "Baker", "+1-555-010-9012", Department.IT, "UI/UX Designer", "72000", date(2021, 8, 14), EmployeeStatus.ACTIVE),
    ("Richard", "Carter", "+1-555-010-0123", Department.IT, "Data Scientist", "90000", date(2020, 4, 7), EmployeeStatus.ACTIVE),
    ("Susan", "Turner", "+1-555-020-4567", Department.HR, "HR Assistant", "50000", date(2021, 6, 1), EmployeeStatus.TERMINATED),
    ("Mark", "Phillips", "+1-555-060-4567", Department.SALES, "Sales Associate", "55000", date(2020, 3, 15), EmployeeStatus.TERMINATED),
]


def sample_drafts() -> list[EmployeeDraft]:
    return [
        EmployeeDraft(
            first_name=first,
            last_name=last,
            email=f"{first.lower()}.{last.lower()}@company.com",
            phone_number=phone,
            department=dept,
            position=position,
            salary=Decimal(salary),
            hire_date=hired,
            status=status,
            is_active=status != EmployeeStatus.TERMINATED,
        )
        for first, last, phone, dept, position, salary, hired, status in _SAMPLES
    ]


def load_sample_employees(repository: EmployeeRepository, service: EmployeeService) -> int:
    """Populate an empty store with the sample staff. Returns how many were created."""
    if repository.count(match_all()) > 0:
        logger.info("sample_data_skipped", reason="store not empty")
        return 0

    drafts = sample_drafts()
    for draft in drafts:
        service.create(draft)
    logger.info("sample_data_loaded", count=len(drafts))
    return len(drafts)
