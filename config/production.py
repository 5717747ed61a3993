import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeper_db"),
}

DEBUG = False

DOCUMENT_STORE = os.getenv("DOCUMENT_STORE", "mysql")
DOCUMENT_KEY = os.getenv("DOCUMENT_KEY", "master")
SYNC_DEBOUNCE_SECONDS = float(os.getenv("SYNC_DEBOUNCE_SECONDS", "2.0"))
SYNC_POLL_SECONDS = float(os.getenv("SYNC_POLL_SECONDS", "2.0"))

LOCAL_STORAGE_DIR = os.getenv("LOCAL_STORAGE_DIR", "instance/local_storage")
TEMPLATE_PATH = os.getenv("TEMPLATE_PATH", "static/Daily Attendance 2.xlsx")
TIMEZONE = os.getenv("TIMEZONE", "")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/timekeeper.log")
