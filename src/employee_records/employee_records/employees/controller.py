from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_TOP_PAID
from ..core.enums import Department, EmployeeStatus
from ..core.exceptions import InvalidQueryError
from ..container import Container
from .payload import draft_from_payload, employee_to_dict, page_to_dict, statistics_to_dict
from .query import page_request, parse_sort


def _enum_arg(enum_cls, value: Optional[str], name: str):
    if value is None or not value.strip():
        return None
    try:
        return enum_cls(value.strip().upper())
    except ValueError:
        raise InvalidQueryError(name, value) from None


def _int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidQueryError(name, raw, f"'{name}' must be an integer") from None


def _decimal_arg(name: str) -> Optional[Decimal]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidQueryError(name, raw, f"'{name}' must be a number") from None
    if not value.is_finite():
        raise InvalidQueryError(name, raw, f"'{name}' must be a finite number")
    return value


def _date_arg(name: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise InvalidQueryError(name, raw, f"'{name}' must be a date in YYYY-MM-DD format") from None


def _page_arg():
    default_size = int(current_app.config.get("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE))
    return page_request(_int_arg("page", 0), _int_arg("size", default_size))


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidQueryError("body", None, "Request body must be a JSON object")
    return data


def _employees(rows) -> list[dict]:
    return [employee_to_dict(e) for e in rows]


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "healthy", "service": "employee-records"})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        page = service.list_all(
            sort=parse_sort(request.args.get("sort_by"), request.args.get("sort_dir")),
            page=_page_arg(),
        )
        return jsonify(page_to_dict(page))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        employee = service.create(draft_from_payload(_json_body()))
        return jsonify(employee_to_dict(employee)), 201

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return jsonify(employee_to_dict(service.get_by_id(employee_id)))

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: int):
        employee = service.update(employee_id, draft_from_payload(_json_body()))
        return jsonify(employee_to_dict(employee))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        service.soft_delete(employee_id)
        return "", 204

    @app.route("/api/employees/search", endpoint="search_employees")
    def search_employees():
        return jsonify(_employees(service.search(request.args.get("keyword"))))

    @app.route("/api/employees/search/paginated", endpoint="search_employees_paginated")
    def search_employees_paginated():
        page = service.search_paginated(request.args.get("keyword"), page=_page_arg())
        return jsonify(page_to_dict(page))

    @app.route("/api/employees/department/<dept>", endpoint="employees_by_department")
    def employees_by_department(dept: str):
        department = _enum_arg(Department, dept, "department")
        return jsonify(_employees(service.list_by_department(department)))

    @app.route("/api/employees/status/<status>", endpoint="employees_by_status")
    def employees_by_status(status: str):
        employee_status = _enum_arg(EmployeeStatus, status, "status")
        return jsonify(_employees(service.list_by_status(employee_status)))

    @app.route("/api/employees/filter", endpoint="filter_employees")
    def filter_employees():
        page = service.list_with_filters(
            department=_enum_arg(Department, request.args.get("department"), "department"),
            status=_enum_arg(EmployeeStatus, request.args.get("status"), "status"),
            keyword=request.args.get("keyword"),
            sort=parse_sort(request.args.get("sort_by"), request.args.get("sort_dir")),
            page=_page_arg(),
        )
        return jsonify(page_to_dict(page))

    @app.route("/api/employees/hire-date-range", endpoint="employees_by_hire_date")
    def employees_by_hire_date():
        rows = service.list_by_hire_date_range(_date_arg("start_date"), _date_arg("end_date"))
        return jsonify(_employees(rows))

    @app.route("/api/employees/salary-range", endpoint="employees_by_salary")
    def employees_by_salary():
        rows = service.list_by_salary_range(_decimal_arg("min_salary"), _decimal_arg("max_salary"))
        return jsonify(_employees(rows))

    @app.route("/api/employees/top-paid", endpoint="top_paid_employees")
    def top_paid_employees():
        return jsonify(_employees(service.top_paid(_int_arg("limit", DEFAULT_TOP_PAID))))

    @app.route("/api/employees/statistics", endpoint="employee_statistics")
    def employee_statistics():
        return jsonify(statistics_to_dict(service.statistics()))

    @app.route("/api/employees/department-count", endpoint="department_count")
    def department_count():
        return jsonify({dept.value: n for dept, n in service.count_by_department().items()})

    @app.route("/api/employees/salary-by-department", endpoint="salary_by_department")
    def salary_by_department():
        totals = service.total_salary_by_department()
        return jsonify({dept.value: float(total) for dept, total in totals.items()})

    @app.route("/api/employees/active", endpoint="active_employees")
    def active_employees():
        return jsonify(_employees(service.list_active()))

    @app.route("/api/employees/validate-email", endpoint="validate_email")
    def validate_email():
        email = request.args.get("email")
        if not email:
            raise InvalidQueryError("email", email, "'email' is required")
        return jsonify({"valid": service.email_is_unique(email, _int_arg("exclude_id"))})
