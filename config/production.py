from .config import Config, db_config, env_flag

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = db_config()
STORAGE_BACKEND = Config.STORAGE_BACKEND

DEBUG = False

LOG_LEVEL = Config.LOG_LEVEL
LOG_JSON = True

DEFAULT_PAGE_SIZE = Config.DEFAULT_PAGE_SIZE

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
