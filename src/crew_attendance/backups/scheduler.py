from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from .service import BackupManager

logger = logging.getLogger(__name__)


def start_backup_scheduler(manager: BackupManager, *, interval_hours: float) -> BackgroundScheduler:
    """Run an automatic backup plus retention sweep every interval.

    Missed runs (process asleep or down) are coalesced and skipped rather
    than replayed.
    """
    scheduler = BackgroundScheduler(
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": 60,
        }
    )
    scheduler.add_job(
        _run_backup,
        "interval",
        hours=interval_hours,
        args=[manager],
        id="attendance-backup",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Backup scheduler started (every %s hour(s))", interval_hours)
    return scheduler


def _run_backup(manager: BackupManager) -> None:
    try:
        manager.run_scheduled()
    except Exception:
        logger.exception("Scheduled backup failed")
