"""Create a manual backup of the attendance data.

Note: Loads the data through the configured backend (GitHub or the local
file) and writes the archive to BACKUP_DIR, the same place the server uses.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from crew_attendance.container import build_container
from crew_attendance.core.enums import BackupKind


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("-d", "--description", default="Backup from command line")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}

    container = build_container(config=config)
    container.store.initialize()
    entry = container.backup_manager.create_backup(BackupKind.MANUAL, description=args.description)
    print(f"OK: Backup created: {container.backup_manager.backup_dir / entry.filename} (months={entry.months})")


if __name__ == "__main__":
    main()
