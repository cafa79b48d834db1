"""
Cleanup Scheduler Service

Sweeps orphaned scratch files left behind when a worker dies between
writing an upload and removing it. Uses APScheduler for the interval job.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from app.config import settings

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

# Directories to clean up
CLEANUP_DIRECTORIES = [settings.UPLOAD_DIR]

# Scratch file TTL in minutes
SCRATCH_TTL_MINUTES = settings.SCRATCH_TTL_MINUTES

# Cleanup interval in minutes
CLEANUP_INTERVAL_MINUTES = settings.CLEANUP_INTERVAL_MINUTES


async def cleanup_old_files() -> dict:
    """
    Delete scratch files older than the TTL.

    In-flight requests remove their own files; anything older than the TTL
    belongs to a request that never reached cleanup.

    Returns:
        dict: Summary of cleanup operation with counts
    """
    cutoff = datetime.now() - timedelta(minutes=SCRATCH_TTL_MINUTES)
    cleanup_summary = {
        "directories_scanned": 0,
        "files_deleted": 0,
        "errors": 0,
    }

    for directory in CLEANUP_DIRECTORIES:
        dir_path = Path(directory)

        if not dir_path.exists():
            logger.debug(f"Cleanup directory does not exist: {directory}")
            continue

        cleanup_summary["directories_scanned"] += 1

        try:
            for scratch_file in dir_path.iterdir():
                if not scratch_file.is_file():
                    continue

                try:
                    file_mtime = datetime.fromtimestamp(scratch_file.stat().st_mtime)

                    if file_mtime < cutoff:
                        scratch_file.unlink()
                        cleanup_summary["files_deleted"] += 1
                        logger.info(f"Cleaned up orphaned scratch file: {scratch_file}")

                except FileNotFoundError:
                    # Removed by its request between listing and unlink
                    continue
                except OSError as e:
                    cleanup_summary["errors"] += 1
                    logger.error(f"Failed to clean up file {scratch_file}: {e}")

        except OSError as e:
            cleanup_summary["errors"] += 1
            logger.error(f"Failed to scan directory {directory}: {e}")

    logger.info(
        f"Cleanup completed: {cleanup_summary['files_deleted']} files deleted, "
        f"{cleanup_summary['errors']} errors"
    )

    return cleanup_summary


def start_cleanup_scheduler():
    """
    Start the cleanup scheduler.

    Safe to call multiple times - will not add duplicate jobs.
    """
    if scheduler.running:
        logger.debug("Scheduler already running")
        return

    job_id = "cleanup_old_files"
    existing_job = scheduler.get_job(job_id)

    if not existing_job:
        scheduler.add_job(
            cleanup_old_files,
            "interval",
            minutes=CLEANUP_INTERVAL_MINUTES,
            id=job_id,
            name="Sweep orphaned scratch files",
            replace_existing=True,
        )
        logger.info(
            f"Scheduled cleanup job: every {CLEANUP_INTERVAL_MINUTES} minute(s), "
            f"TTL: {SCRATCH_TTL_MINUTES} minutes"
        )

    scheduler.start()
    logger.info("Cleanup scheduler started")


def stop_cleanup_scheduler():
    """Stop the cleanup scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Cleanup scheduler stopped")


def get_scheduler_status() -> dict:
    """
    Get current scheduler status for health checks.

    Returns:
        dict: Scheduler status including running state and job info
    """
    job = scheduler.get_job("cleanup_old_files")
    return {
        "running": scheduler.running,
        "job_scheduled": job is not None,
        "next_run": str(job.next_run_time) if job else None,
        "interval_minutes": CLEANUP_INTERVAL_MINUTES,
        "ttl_minutes": SCRATCH_TTL_MINUTES,
    }
