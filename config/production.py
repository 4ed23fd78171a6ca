import os

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ATTENDANCE_BACKEND = os.getenv("ATTENDANCE_BACKEND", "mysql")
ATTENDANCE_DATA_FILE = os.getenv("ATTENDANCE_DATA_FILE", "/var/lib/school-attendance/attendance.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
