import os

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ATTENDANCE_BACKEND = "memory"
ATTENDANCE_DATA_FILE = os.getenv("ATTENDANCE_DATA_FILE", "var/attendance-test.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance_test"),
}

AUTO_INIT_DB = False
