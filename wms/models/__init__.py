from .base import IdMixin, CreatedAtMixin, TimestampMixin
from .user import User
from .inventory import InventoryItem, Transaction, ExchangeQueueItem
from .bom import BomGuide
from .warehouse import WarehouseZone
from .work_diary import WorkDiary, WorkDiaryComment, WorkNotification

__all__ = [
    # Base
    "IdMixin", "CreatedAtMixin", "TimestampMixin",
    # Users
    "User",
    # Inventory
    "InventoryItem", "Transaction", "ExchangeQueueItem",
    # BOM
    "BomGuide",
    # Warehouse
    "WarehouseZone",
    # Work diary
    "WorkDiary", "WorkDiaryComment", "WorkNotification",
]
