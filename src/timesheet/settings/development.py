import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# sqlite: local file at STORAGE_PATH; memory: lost on restart
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sqlite")
STORAGE_PATH = os.getenv("STORAGE_PATH", "instance/timesheet.sqlite3")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")

SEED_DEFAULT_WORKERS = bool(int(os.getenv("SEED_DEFAULT_WORKERS", "1")))
