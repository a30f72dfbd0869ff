import os

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
PORT = int(os.getenv("PORT", "3000"))

# Local JSON document, also the mirror/fallback when GitHub is configured
DATA_FILE = os.getenv("DATA_FILE", "attendance_data.json")

# GitHub storage is enabled when token, owner and repo are all set
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_OWNER = os.getenv("GITHUB_OWNER")
GITHUB_REPO = os.getenv("GITHUB_REPO")
GITHUB_DATA_PATH = os.getenv("GITHUB_DATA_PATH", "data/attendance_data.json")
GITHUB_BRANCH = os.getenv("GITHUB_BRANCH") or None
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_TIMEOUT = float(os.getenv("GITHUB_TIMEOUT", "10"))

BACKUP_DIR = os.getenv("BACKUP_DIR", "backups")
BACKUP_RETENTION_DAYS = int(os.getenv("BACKUP_RETENTION_DAYS", "30"))
BACKUP_INTERVAL_HOURS = float(os.getenv("BACKUP_INTERVAL_HOURS", "24"))
BACKUP_SCHEDULER_ENABLED = bool(int(os.getenv("BACKUP_SCHEDULER_ENABLED", "1")))
BACKUP_BEFORE_IMPORT = bool(int(os.getenv("BACKUP_BEFORE_IMPORT", "1")))

# Load data in a background thread; requests wait until it is done
INIT_IN_BACKGROUND = bool(int(os.getenv("INIT_IN_BACKGROUND", "1")))
