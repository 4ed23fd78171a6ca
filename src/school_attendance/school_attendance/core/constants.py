"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ATTENDANCE_ID_PREFIX = "ATT"
JSON_STORAGE_KEY = "kv2_attendance"
CLASSES_STORAGE_KEY = "kv2_classes"
DEFAULT_PERIOD = "year"
ISO_DATE_FORMAT = "%Y-%m-%d"
