from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_records.employee_records.container import build_container
from src.employee_records.employee_records.employees.sample_data import load_sample_employees


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(db_config=db_config, storage="mysql")
    created = load_sample_employees(container.employees_repo, container.employee_service)

    print(f"OK: Seeded {created} employees -> {container.conn.config.dsn}")


if __name__ == "__main__":
    main()
