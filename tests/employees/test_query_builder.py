from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.employee_records.employee_records.core.enums import Department, EmployeeStatus, SortDirection
from src.employee_records.employee_records.core.exceptions import InvalidQueryError
from src.employee_records.employee_records.employees.model import Employee, PageRequest, SortOrder
from src.employee_records.employee_records.employees.mysql_employee_repository import render_order_by
from src.employee_records.employee_records.employees.query import (
    DEFAULT_SORT,
    and_,
    build_employee_query,
    department_is,
    keyword_matches,
    match_all,
    or_,
    page_request,
    parse_sort,
    status_is,
)


def _employee(**overrides) -> Employee:
    values = dict(
        employee_id=1,
        first_name="John",
        last_name="Smith",
        email="john.smith@company.com",
        phone_number=None,
        department=Department.IT,
        position="Senior Software Engineer",
        salary=Decimal("95000"),
        hire_date=date(2020, 3, 15),
        status=EmployeeStatus.ACTIVE,
        is_active=True,
        created_at=datetime(2024, 1, 1, 9, 0),
        updated_at=datetime(2024, 1, 1, 9, 0),
    )
    values.update(overrides)
    return Employee(**values)


def test_no_filters_matches_everything():
    query = build_employee_query()

    assert query.predicate.sql == "1=1"
    assert query.predicate.params == ()
    assert query.predicate(_employee())
    assert query.sort == DEFAULT_SORT


def test_blank_keyword_is_no_filter():
    for keyword in (None, "", "   "):
        predicate = keyword_matches(keyword)
        assert predicate.is_identity
        assert predicate(_employee(first_name="Anyone"))


def test_only_given_filters_are_anded():
    query = build_employee_query(department=Department.HR, status=EmployeeStatus.ON_LEAVE)

    assert query.predicate.sql == "(department=%s) AND (status=%s)"
    assert query.predicate.params == ("HR", "ON_LEAVE")
    assert query.predicate(_employee(department=Department.HR, status=EmployeeStatus.ON_LEAVE))
    assert not query.predicate(_employee(department=Department.HR))
    assert not query.predicate(_employee(status=EmployeeStatus.ON_LEAVE))


def test_keyword_is_case_insensitive_substring_over_four_fields():
    predicate = keyword_matches("SMITH")

    assert predicate(_employee())
    assert predicate(_employee(last_name="Doe", email="asmith@x.com"))
    assert predicate(_employee(last_name="Doe", email="d@x.com", position="Blacksmith"))
    assert not predicate(_employee(first_name="Jane", last_name="Doe", email="jane@x.com", position="Recruiter"))
    assert predicate.sql.count("LIKE %s") == 4
    assert set(predicate.params) == {"%smith%"}


def test_keyword_escapes_like_wildcards():
    predicate = keyword_matches("100%_x")

    assert predicate.params[0] == "%100\\%\\_x%"
    assert not predicate(_employee(position="1000 x"))


def test_keyword_combined_with_department_keeps_or_grouped():
    query = build_employee_query(department=Department.IT, keyword="dev")

    assert query.predicate.sql.startswith("(department=%s) AND ((LOWER(first_name) LIKE %s) OR")
    assert query.predicate.params[0] == "IT"
    assert not query.predicate(_employee(department=Department.SALES, position="DevOps"))


def test_identity_is_absorbed_by_and_and_dominates_or():
    p = department_is(Department.IT)

    assert and_(match_all(), p) is p
    assert and_().is_identity
    assert or_(p, match_all()).is_identity
    assert (p & status_is(EmployeeStatus.ACTIVE)).sql == "(department=%s) AND (status=%s)"
    either = p | status_is(EmployeeStatus.ON_LEAVE)
    assert either.params == ("IT", "ON_LEAVE")
    assert either(_employee(department=Department.HR, status=EmployeeStatus.ON_LEAVE))


def test_parse_sort_splits_fields_and_applies_direction():
    sort = parse_sort("salary,last_name", "DESC")

    assert sort == (SortOrder("salary", SortDirection.DESC), SortOrder("last_name", SortDirection.DESC))


def test_parse_sort_defaults_to_names():
    assert parse_sort(None) == DEFAULT_SORT
    assert parse_sort("") == DEFAULT_SORT


def test_unsupported_sort_field_is_rejected():
    with pytest.raises(InvalidQueryError):
        parse_sort("password")

    with pytest.raises(InvalidQueryError):
        build_employee_query(sort=[SortOrder("phone_number")])


def test_unsupported_sort_direction_is_rejected():
    with pytest.raises(InvalidQueryError):
        parse_sort("salary", "sideways")


@pytest.mark.parametrize("index,size", [(-1, 10), (0, 0), (3, -5)])
def test_page_request_bounds(index, size):
    with pytest.raises(InvalidQueryError):
        page_request(index, size)


def test_page_request_offset():
    assert page_request(2, 10).offset == 20


def test_order_by_appends_id_tie_breaker():
    query = build_employee_query(sort=[SortOrder("salary", SortDirection.DESC)], page=PageRequest(0, 5))

    assert render_order_by(query) == "salary DESC, employee_id ASC"
    assert build_employee_query(sort=[SortOrder("employee_id", SortDirection.DESC)]).order_by == (
        SortOrder("employee_id", SortDirection.DESC),
    )
