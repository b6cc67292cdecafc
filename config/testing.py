import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
}

BUSINESS_TIMEZONE = "UTC"

PUNCH_IN_HOOK_URL = None
PUNCH_IN_HOOK_TOKEN = None
PUNCH_IN_HOOK_TIMEOUT = 2.0

JOB_TOKEN = None

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
