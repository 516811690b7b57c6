from __future__ import annotations

import importlib

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.error_mapping import register_error_handlers
from .common.logging import configure_logging, get_logger, register_request_logging
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .employees.sample_data import load_sample_employees

logger = get_logger(__name__)


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_PAGE_SIZE"] = int(getattr(settings, "DEFAULT_PAGE_SIZE", 10))

    configure_logging(
        service_name="employee-records",
        log_level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_logs=bool(getattr(settings, "LOG_JSON", True)),
    )

    storage = getattr(settings, "STORAGE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)

    if storage == "mysql":
        logger.info("startup", settings=settings_module, db=DBConfig.from_mapping(db_config).dsn)
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema_ready", tables=len(list_tables(db_config)))
    else:
        logger.info("startup", settings=settings_module, storage=storage)

    container = build_container(db_config=db_config, storage=storage)
    app.extensions["container"] = container

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        load_sample_employees(container.employees_repo, container.employee_service)

    register_request_logging(app)
    register_error_handlers(app)
    register_employees(app, container)

    return app
