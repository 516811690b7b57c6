from __future__ import annotations

from datetime import datetime

import pytest

from src.employee_records.employee_records.common.error_mapping import error_payload, http_status_for
from src.employee_records.employee_records.core.exceptions import (
    DuplicateEmailError,
    FieldViolation,
    InvalidQueryError,
    InvalidRangeError,
    NotFoundError,
    UniqueConstraintError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc,status",
    [
        (NotFoundError(7), 404),
        (DuplicateEmailError("a@company.com"), 409),
        (InvalidRangeError("salary", 2, 1), 400),
        (InvalidQueryError("sort_by", "password"), 400),
        (ValidationError([FieldViolation("email", "is required")]), 400),
        (RuntimeError("boom"), 500),
        (UniqueConstraintError("email", "a@company.com"), 500),
    ],
)
def test_status_for_each_error_kind(exc, status):
    assert http_status_for(exc)[0] == status


def test_payload_carries_message_and_path():
    payload, status = error_payload(NotFoundError(7), path="/api/employees/7", at=datetime(2026, 1, 15, 9, 0))

    assert status == 404
    assert payload == {
        "message": "Employee not found with id: 7",
        "error": "Employee Not Found",
        "status": 404,
        "timestamp": "2026-01-15T09:00:00",
        "path": "/api/employees/7",
        "details": [],
    }


def test_validation_payload_lists_each_violation():
    exc = ValidationError([FieldViolation("first_name", "is required"), FieldViolation("salary", "is required")])

    payload, _ = error_payload(exc, path="/api/employees")

    assert payload["details"] == ["first_name: is required", "salary: is required"]


def test_unexpected_errors_hide_their_message():
    payload, status = error_payload(RuntimeError("password=hunter2"), path="/x")

    assert status == 500
    assert "hunter2" not in payload["message"]
