from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.employee_records.employee_records.core.enums import Department, EmployeeStatus, SortDirection
from src.employee_records.employee_records.core.exceptions import UniqueConstraintError
from src.employee_records.employee_records.employees.memory_repository import InMemoryEmployeeRepository
from src.employee_records.employee_records.employees.model import Employee, PageRequest, SortOrder
from src.employee_records.employee_records.employees.query import EmployeeQuery, build_employee_query, match_all

CREATED = datetime(2025, 1, 1, 8, 0)


def _employee(n: int, **overrides) -> Employee:
    values = dict(
        employee_id=0,
        first_name=f"Name{n:02d}",
        last_name="Tester",
        email=f"user{n}@company.com",
        phone_number=None,
        department=Department.IT,
        position="Engineer",
        salary=Decimal(40000 + n * 1000),
        hire_date=date(2020, 1, 1),
        status=EmployeeStatus.ACTIVE,
        is_active=True,
        created_at=CREATED,
        updated_at=CREATED,
    )
    values.update(overrides)
    return Employee(**values)


def _repo_with(count: int) -> InMemoryEmployeeRepository:
    repo = InMemoryEmployeeRepository()
    for n in range(1, count + 1):
        repo.insert(_employee(n))
    return repo


def test_insert_assigns_sequential_ids():
    repo = InMemoryEmployeeRepository()

    first = repo.insert(_employee(1))
    second = repo.insert(_employee(2))

    assert (first.employee_id, second.employee_id) == (1, 2)
    assert repo.get_by_id(2).email == "user2@company.com"


def test_insert_rejects_duplicate_email_case_sensitively():
    repo = InMemoryEmployeeRepository()
    repo.insert(_employee(1))

    with pytest.raises(UniqueConstraintError):
        repo.insert(_employee(2, email="user1@company.com"))

    # differs only by case: a different email
    repo.insert(_employee(3, email="USER1@company.com"))
    assert repo.count(match_all()) == 2


def test_exists_by_email_can_exclude_one_id():
    repo = _repo_with(2)

    assert repo.exists_by_email("user1@company.com")
    assert not repo.exists_by_email("user1@company.com", exclude_id=1)
    assert repo.exists_by_email("user1@company.com", exclude_id=2)


def test_third_page_of_twenty_five_holds_last_five():
    repo = _repo_with(25)
    query = build_employee_query(sort=[SortOrder("first_name")], page=PageRequest(2, 10))

    items, total = repo.find_page(query)

    assert total == 25
    assert [e.first_name for e in items] == [f"Name{n:02d}" for n in range(21, 26)]


def test_page_past_the_end_is_empty_with_total():
    repo = _repo_with(7)

    items, total = repo.find_page(build_employee_query(page=PageRequest(5, 3)))

    assert items == []
    assert total == 7


def test_total_counts_the_filtered_set_not_the_page():
    repo = _repo_with(6)
    repo.insert(_employee(7, department=Department.HR))
    repo.insert(_employee(8, department=Department.HR))

    items, total = repo.find_page(build_employee_query(department=Department.HR, page=PageRequest(0, 1)))

    assert total == 2
    assert len(items) == 1


def test_multi_key_sort_with_mixed_directions():
    repo = InMemoryEmployeeRepository()
    repo.insert(_employee(1, department=Department.SALES, salary=Decimal("50000")))
    repo.insert(_employee(2, department=Department.HR, salary=Decimal("60000")))
    repo.insert(_employee(3, department=Department.SALES, salary=Decimal("70000")))

    query = EmployeeQuery(
        match_all(),
        (SortOrder("department"), SortOrder("salary", SortDirection.DESC)),
    )

    assert [e.employee_id for e in repo.find(query)] == [2, 3, 1]


def test_text_sort_ignores_case():
    repo = InMemoryEmployeeRepository()
    repo.insert(_employee(1, first_name="bob"))
    repo.insert(_employee(2, first_name="Alice"))
    repo.insert(_employee(3, first_name="Carl"))

    names = [e.first_name for e in repo.find(EmployeeQuery(match_all(), (SortOrder("first_name"),)))]

    assert names == ["Alice", "bob", "Carl"]


def test_equal_sort_keys_fall_back_to_id_order():
    repo = InMemoryEmployeeRepository()
    for n in range(1, 5):
        repo.insert(_employee(n, first_name="Same"))

    first_page = repo.find(EmployeeQuery(match_all(), (SortOrder("first_name"),), PageRequest(0, 2)))
    second_page = repo.find(EmployeeQuery(match_all(), (SortOrder("first_name"),), PageRequest(1, 2)))

    assert [e.employee_id for e in first_page + second_page] == [1, 2, 3, 4]


def test_department_activity_groups_by_department_and_flag():
    repo = InMemoryEmployeeRepository()
    repo.insert(_employee(1, salary=Decimal("70000")))
    repo.insert(_employee(2, salary=Decimal("80000")))
    repo.insert(_employee(3, salary=Decimal("50000"), is_active=False))

    rows = {(r.department, r.is_active): r for r in repo.department_activity()}

    assert rows[(Department.IT, True)].count == 2
    assert rows[(Department.IT, True)].salary_total == Decimal("150000")
    assert rows[(Department.IT, False)].count == 1


def test_email_sorts_case_sensitively_like_its_binary_column():
    repo = InMemoryEmployeeRepository()
    repo.insert(_employee(1, email="bob@company.com"))
    repo.insert(_employee(2, email="Zed@company.com"))
    repo.insert(_employee(3, email="alice@company.com"))

    emails = [e.email for e in repo.find(EmployeeQuery(match_all(), (SortOrder("email"),)))]

    assert emails == ["Zed@company.com", "alice@company.com", "bob@company.com"]
