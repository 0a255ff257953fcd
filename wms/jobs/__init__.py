# Jobs Package - Scheduled background tasks
from .file_cleanup import FileCleanupScheduler, start_scheduler, stop_scheduler

__all__ = ["FileCleanupScheduler", "start_scheduler", "stop_scheduler"]
