import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_presence_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

LOCATION_TIMEOUT_MS = int(os.getenv("LOCATION_TIMEOUT_MS", "2000"))
# Threads for server-side location lookups; a hung provider holds one until it returns.
LOCATION_WORKERS = int(os.getenv("LOCATION_WORKERS", "16"))

# "Now" is the server's local clock, read as the institution's wall time. Run with TZ set to
# the institution's zone (e.g. TZ=America/Sao_Paulo).

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
