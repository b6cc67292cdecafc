import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Europe/Oslo")

PUNCH_IN_HOOK_URL = os.getenv("PUNCH_IN_HOOK_URL") or None
PUNCH_IN_HOOK_TOKEN = os.getenv("PUNCH_IN_HOOK_TOKEN") or None
PUNCH_IN_HOOK_TIMEOUT = float(os.getenv("PUNCH_IN_HOOK_TIMEOUT", "10"))

JOB_TOKEN = os.getenv("JOB_TOKEN", "please-set-JOB_TOKEN")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
