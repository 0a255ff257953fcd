# Pydantic Schemas Package
from .inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse, StockAdjustRequest, StockAdjustResult, InventoryAlert
from .transaction import TransactionCreate, TransactionResponse, ExchangeQueueCreate, ExchangeQueueResponse
from .user import UserCreate, UserUpdate, PermissionUpdate, RoleChange, UserResponse
from .work_diary import WorkDiaryCreate, WorkDiaryUpdate, WorkDiaryResponse, CommentCreate, CommentResponse, NotificationCreate, NotificationResponse
from .bom import BomGuideCreate, BomGuideResponse, BomCheckResult
from .warehouse import WarehouseZoneCreate, WarehouseZoneResponse, LocationInfo
from .upload import UploadRequest, BackupPayload, FileCleanupOptions, FileDeleteRequest, FileBackupRequest

__all__ = [
    "InventoryItemCreate", "InventoryItemUpdate", "InventoryItemResponse", "StockAdjustRequest", "StockAdjustResult", "InventoryAlert",
    "TransactionCreate", "TransactionResponse", "ExchangeQueueCreate", "ExchangeQueueResponse",
    "UserCreate", "UserUpdate", "PermissionUpdate", "RoleChange", "UserResponse",
    "WorkDiaryCreate", "WorkDiaryUpdate", "WorkDiaryResponse", "CommentCreate", "CommentResponse", "NotificationCreate", "NotificationResponse",
    "BomGuideCreate", "BomGuideResponse", "BomCheckResult",
    "WarehouseZoneCreate", "WarehouseZoneResponse", "LocationInfo",
    "UploadRequest", "BackupPayload", "FileCleanupOptions", "FileDeleteRequest", "FileBackupRequest",
]
