import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

# Prefer ADMIN_PASSWORD_HASH / TEACHER_PASSWORD_HASH (werkzeug format) in production.
DEMO_USERS = {
    "admin": {
        "username": os.getenv("ADMIN_USERNAME", "admin"),
        "password": os.getenv("ADMIN_PASSWORD", "admin123"),
        "password_hash": os.getenv("ADMIN_PASSWORD_HASH", ""),
    },
    "teacher": {
        "username": os.getenv("TEACHER_USERNAME", "teacher"),
        "password": os.getenv("TEACHER_PASSWORD", "teach123"),
        "password_hash": os.getenv("TEACHER_PASSWORD_HASH", ""),
    },
}

DASHBOARD_REFRESH_SECONDS = int(os.getenv("DASHBOARD_REFRESH_SECONDS", "30"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
