import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

# In-memory application state; nothing touches disk or a database.
STORAGE_BACKEND = "file"
DATA_FILE = None

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dtr_test"),
}

AUTO_INIT_DB = False
AUTO_SEED_DB = True

LOCATION_THRESHOLD_METERS = 200
POSITION_TIMEOUT_MS = 10000

IT_PASSWORD = "password"

# Idle minutes before a logged-in session expires.
SESSION_TIMEOUT_MINUTES = 15

LOG_LEVEL = "WARNING"
