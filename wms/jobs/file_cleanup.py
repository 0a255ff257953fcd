"""
File Cleanup Scheduler - periodic cleanup of the attached assets directory
"""
from datetime import datetime
from typing import Optional
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from wms.core import settings
from wms.services import FileService

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler = None


class FileCleanupScheduler:
    """
    Runs the attached-file auto cleanup on a fixed interval
    """

    JOB_ID = "file_auto_cleanup"

    def __init__(self, interval_hours: Optional[int] = None):
        self.scheduler = AsyncIOScheduler()
        self.interval_hours = interval_hours or settings.FILE_CLEANUP_INTERVAL_HOURS
        self.is_running = False

    def start(self):
        """Start the scheduler"""
        if self.is_running:
            return
        self.scheduler.add_job(
            func=self.run_cleanup,
            trigger=IntervalTrigger(hours=self.interval_hours),
            id=self.JOB_ID,
            name="Attached file auto cleanup",
            replace_existing=True,
            max_instances=1,
        )
        self.scheduler.start()
        self.is_running = True
        logger.info(f"File cleanup scheduler started (every {self.interval_hours}h)")

    def stop(self):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown(wait=False)
            self.is_running = False
            logger.info("File cleanup scheduler stopped")

    def run_cleanup(self) -> dict:
        started = datetime.now()
        try:
            result = FileService.auto_cleanup()
        except Exception as e:
            logger.error(f"Scheduled file cleanup failed: {e}")
            return {"deleted_files": [], "saved_space": 0, "errors": [str(e)]}

        logger.info(
            f"Scheduled file cleanup finished in {(datetime.now() - started).total_seconds():.1f}s - "
            f"deleted={len(result['deleted_files'])}, errors={len(result['errors'])}"
        )
        return result

    def trigger_now(self):
        """Run the cleanup once, as soon as possible"""
        self.scheduler.add_job(
            func=self.run_cleanup,
            trigger="date",
            run_date=datetime.now(),
            id=f"{self.JOB_ID}_immediate",
            replace_existing=True,
        )
        logger.info("Triggered immediate file cleanup")


# ========== Global Functions ==========

def get_scheduler() -> "FileCleanupScheduler":
    """Get or create the global scheduler instance"""
    global _scheduler
    if _scheduler is None:
        _scheduler = FileCleanupScheduler()
    return _scheduler


def start_scheduler():
    """Start the global scheduler"""
    get_scheduler().start()


def stop_scheduler():
    """Stop the global scheduler"""
    global _scheduler
    if _scheduler:
        _scheduler.stop()
        _scheduler = None
