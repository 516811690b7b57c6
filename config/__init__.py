"""Per-environment settings modules for the employee records service.

``config.development`` talks to a local MySQL and creates the schema on start,
``config.production`` reads everything from the environment, and
``config.testing`` swaps in the in-memory employee store so the app and its
tests run without a database.
"""
import os

SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}

DEFAULT_SETTINGS = "config.development"


def get_settings_module(env: str | None = None) -> str:
    """Settings module for ``env`` (default: ``APP_ENV``); unknown names get development."""
    env = (env or os.getenv("APP_ENV", "development")).strip().lower()
    return SETTINGS_BY_ENV.get(env, DEFAULT_SETTINGS)
