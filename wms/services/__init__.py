# Services Package
from .inventory_service import InventoryService
from .transaction_service import TransactionService
from .exchange_service import ExchangeService
from .work_diary_service import WorkDiaryService
from .notification_service import NotificationService
from .bom_service import BomService
from .warehouse_service import WarehouseService
from .upload_service import UploadService
from .export_service import ExportService
from .file_service import FileService
from .system_service import SystemService
from .user_service import UserService
from . import permission_service

__all__ = [
    "InventoryService",
    "TransactionService",
    "ExchangeService",
    "WorkDiaryService",
    "NotificationService",
    "BomService",
    "WarehouseService",
    "UploadService",
    "ExportService",
    "FileService",
    "SystemService",
    "UserService",
    "permission_service",
]
