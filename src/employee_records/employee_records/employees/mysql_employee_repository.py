from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import Department, EmployeeStatus
from ..core.exceptions import UniqueConstraintError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DepartmentActivity, Employee, PageRequest
from .query import SORTABLE_FIELDS, EmployeeQuery, Predicate, email_is, and_, id_is_not
from .repository import EmployeeRepository

COLUMNS = (
    "employee_id, first_name, last_name, email, phone_number, department, position, "
    "salary, hire_date, status, is_active, created_at, updated_at"
)


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone_number=row.get("phone_number"),
        department=Department(row["department"]),
        position=row["position"],
        salary=row["salary"],
        hire_date=row["hire_date"],
        status=EmployeeStatus(row["status"]),
        is_active=bool(row.get("is_active", True)),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def render_order_by(query: EmployeeQuery) -> str:
    return ", ".join(
        f"{SORTABLE_FIELDS[s.field]} {'DESC' if s.descending else 'ASC'}" for s in query.order_by
    )


# LIMIT and OFFSET only take unsigned 64-bit values; no table holds more rows than a BIGINT id can number.
MAX_ROW_COUNT = 2**63 - 1


def limit_offset(page: PageRequest) -> Optional[tuple[int, int]]:
    """LIMIT/OFFSET parameters for a page window, or None when it starts past any possible row."""
    if page.offset > MAX_ROW_COUNT:
        return None
    return min(page.size, MAX_ROW_COUNT), page.offset


def _is_duplicate_key(exc: IntegrityError) -> bool:
    return exc.errno == errorcode.ER_DUP_ENTRY


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, predicate: Predicate) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {COLUMNS} FROM employees WHERE {predicate.sql} LIMIT 1",
                predicate.params,
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._select_one(email_is(email))

    def exists_by_email(self, email: str, *, exclude_id: Optional[int] = None) -> bool:
        predicate = email_is(email)
        if exclude_id is not None:
            predicate = and_(predicate, id_is_not(exclude_id))
        return self.count(predicate) > 0

    def insert(self, employee: Employee) -> Employee:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(
                        first_name, last_name, email, phone_number, department, position,
                        salary, hire_date, status, is_active, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee.first_name,
                        employee.last_name,
                        employee.email,
                        employee.phone_number,
                        employee.department.value,
                        employee.position,
                        employee.salary,
                        employee.hire_date,
                        employee.status.value,
                        1 if employee.is_active else 0,
                        employee.created_at,
                        employee.updated_at,
                    ),
                )
                new_id = int(cur.lastrowid)
        except IntegrityError as exc:
            if _is_duplicate_key(exc):
                raise UniqueConstraintError("email", employee.email) from exc
            raise
        return self.get_by_id(new_id)

    def update(self, employee: Employee) -> Employee:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET first_name=%s, last_name=%s, email=%s, phone_number=%s, department=%s,
                        position=%s, salary=%s, hire_date=%s, status=%s, is_active=%s, updated_at=%s
                    WHERE employee_id=%s
                    """,
                    (
                        employee.first_name,
                        employee.last_name,
                        employee.email,
                        employee.phone_number,
                        employee.department.value,
                        employee.position,
                        employee.salary,
                        employee.hire_date,
                        employee.status.value,
                        1 if employee.is_active else 0,
                        employee.updated_at,
                        int(employee.employee_id),
                    ),
                )
        except IntegrityError as exc:
            if _is_duplicate_key(exc):
                raise UniqueConstraintError("email", employee.email) from exc
            raise
        return self.get_by_id(employee.employee_id)

    def find(self, query: EmployeeQuery) -> Sequence[Employee]:
        sql = f"SELECT {COLUMNS} FROM employees WHERE {query.predicate.sql} ORDER BY {render_order_by(query)}"
        params = query.predicate.params
        if query.page is not None:
            window = limit_offset(query.page)
            if window is None:
                return []
            sql += " LIMIT %s OFFSET %s"
            params = params + window
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_employee(r) for r in fetchall(cur)]

    def find_page(self, query: EmployeeQuery) -> tuple[Sequence[Employee], int]:
        where = query.predicate.sql
        params = query.predicate.params
        select_sql = f"SELECT {COLUMNS} FROM employees WHERE {where} ORDER BY {render_order_by(query)}"
        select_params = params
        if query.page is not None:
            select_sql += " LIMIT %s OFFSET %s"
            select_params = params + (min(query.page.size, MAX_ROW_COUNT), query.page.offset)

        with db_cursor(self._conn_factory, snapshot=True) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employees WHERE {where}", params)
            total = int(fetchone(cur)["total"])
            if query.page is not None and query.page.offset >= total:
                return [], total
            cur.execute(select_sql, select_params)
            items = [_row_to_employee(r) for r in fetchall(cur)]
        return items, total

    def count(self, predicate: Predicate) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employees WHERE {predicate.sql}", predicate.params)
            return int(fetchone(cur)["total"])

    def department_activity(self) -> Sequence[DepartmentActivity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT department, is_active, COUNT(*) AS cnt, COALESCE(SUM(salary), 0) AS salary_total
                FROM employees
                GROUP BY department, is_active
                """
            )
            return [
                DepartmentActivity(
                    department=Department(r["department"]),
                    is_active=bool(r["is_active"]),
                    count=int(r["cnt"]),
                    salary_total=r["salary_total"],
                )
                for r in fetchall(cur)
            ]
