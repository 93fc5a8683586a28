import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_workforce_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REMOTE_STORE_ENABLED = False
# None keeps the local side-store in memory.
LOCAL_STORE_PATH = None

AUTO_INIT_DB = False
