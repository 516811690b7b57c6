from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .employees.statistics import EmployeeStatisticsService

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository

    statistics_service: EmployeeStatisticsService
    employee_service: EmployeeService


def build_container(*, db_config: Optional[dict] = None, storage: str = "mysql") -> Container:
    if storage not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {storage!r}")

    conn: Optional[DatabaseConnection] = None
    if storage == "mysql":
        if db_config is None:
            raise ValueError("db_config is required for the mysql storage backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        employees_repo: EmployeeRepository = MySQLEmployeeRepository(conn)
    else:
        employees_repo = InMemoryEmployeeRepository()

    statistics_service = EmployeeStatisticsService(employees_repo)
    employee_service = EmployeeService(employees_repo, statistics=statistics_service)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        statistics_service=statistics_service,
        employee_service=employee_service,
    )
