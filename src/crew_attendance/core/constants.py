"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

import calendar

MEETING_WEEKDAYS = frozenset({calendar.MONDAY, calendar.WEDNESDAY, calendar.THURSDAY})

EXTRA_PREFIX = "extra"
EXTRA_KEYS = ("extra1", "extra2", "extra3")

UNASSIGNED_ROLE = "미정"

EXPORT_VERSION = "1.0"

DEFAULT_DATA_FILE = "attendance_data.json"
DEFAULT_GITHUB_DATA_PATH = "data/attendance_data.json"
DEFAULT_BACKUP_DIR = "backups"
DEFAULT_BACKUP_RETENTION_DAYS = 30
DEFAULT_BACKUP_INTERVAL_HOURS = 24
DEFAULT_GITHUB_TIMEOUT = 10
