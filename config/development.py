import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

# Civil timezone all business hours and calendar days are evaluated in.
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Europe/Oslo")

# Fired after every automatic punch-in (e.g. automatic temperature logs). Empty = disabled.
PUNCH_IN_HOOK_URL = os.getenv("PUNCH_IN_HOOK_URL") or None
PUNCH_IN_HOOK_TOKEN = os.getenv("PUNCH_IN_HOOK_TOKEN") or None
PUNCH_IN_HOOK_TIMEOUT = float(os.getenv("PUNCH_IN_HOOK_TIMEOUT", "10"))

# Shared secret expected in X-Job-Token by the /api/jobs endpoints. Empty = open.
JOB_TOKEN = os.getenv("JOB_TOKEN") or None

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
