from .config import db_config

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()
STORAGE_BACKEND = "memory"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False

DEFAULT_PAGE_SIZE = 10

AUTO_INIT_DB = False
AUTO_SEED_DB = False
