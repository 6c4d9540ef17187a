import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# "file" keeps all state in one JSON file; "mysql" uses DB_CONFIG.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
DATA_FILE = os.getenv("DATA_FILE", "instance/dtr_state.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dtr_db"),
}

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Seed the demo departments and employees when missing
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

LOCATION_THRESHOLD_METERS = float(os.getenv("LOCATION_THRESHOLD_METERS", "200"))
POSITION_TIMEOUT_MS = int(os.getenv("POSITION_TIMEOUT_MS", "10000"))

IT_PASSWORD = os.getenv("IT_PASSWORD", "password")

# Idle minutes before a logged-in session expires.
SESSION_TIMEOUT_MINUTES = int(os.getenv("SESSION_TIMEOUT_MINUTES", "15"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
