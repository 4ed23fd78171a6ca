import os

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | json | mysql
ATTENDANCE_BACKEND = os.getenv("ATTENDANCE_BACKEND", "json")
ATTENDANCE_DATA_FILE = os.getenv("ATTENDANCE_DATA_FILE", "var/attendance.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

# If enabled (mysql backend only), schema.sql is applied on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
