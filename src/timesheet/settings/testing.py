SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "memory"
STORAGE_PATH = ""

LOG_LEVEL = "WARNING"
LOG_FILE = ""

SEED_DEFAULT_WORKERS = False
