from .config import Config, db_config, env_flag

SECRET_KEY = Config.SECRET_KEY if Config.SECRET_KEY != "please-set-SECRET_KEY" else "dev-secret-key"

DB_CONFIG = db_config()
STORAGE_BACKEND = Config.STORAGE_BACKEND

DEBUG = True

LOG_LEVEL = "DEBUG"
LOG_JSON = False

DEFAULT_PAGE_SIZE = Config.DEFAULT_PAGE_SIZE

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also load the sample employees when the table is empty
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
