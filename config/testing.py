import os

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
PORT = 3000

DATA_FILE = os.getenv("DATA_FILE", "test_attendance_data.json")

# Tests never talk to GitHub unless they override these
GITHUB_TOKEN = None
GITHUB_OWNER = None
GITHUB_REPO = None
GITHUB_DATA_PATH = "data/attendance_data.json"
GITHUB_BRANCH = None
GITHUB_API_URL = "https://api.github.com"
GITHUB_TIMEOUT = 5.0

BACKUP_DIR = os.getenv("BACKUP_DIR", "test_backups")
BACKUP_RETENTION_DAYS = 30
BACKUP_INTERVAL_HOURS = 24.0
BACKUP_SCHEDULER_ENABLED = False
BACKUP_BEFORE_IMPORT = False

INIT_IN_BACKGROUND = False
