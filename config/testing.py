import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeper_test"),
}

DEBUG = False
TESTING = True

DOCUMENT_STORE = "memory"
DOCUMENT_KEY = "master"
SYNC_DEBOUNCE_SECONDS = 0.05
SYNC_POLL_SECONDS = 0.05

# Empty means in-memory local storage
LOCAL_STORAGE_DIR = ""
TEMPLATE_PATH = os.getenv("TEMPLATE_PATH", "")
TIMEZONE = "UTC"

AUTO_INIT_DB = False

LOG_LEVEL = "WARNING"
LOG_FILE = ""
