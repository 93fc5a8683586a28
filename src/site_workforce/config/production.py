import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_workforce"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REMOTE_STORE_ENABLED = bool(int(os.getenv("REMOTE_STORE_ENABLED", "1")))
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "/var/lib/site_workforce/local_store.json")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
