from .config import settings
from .database import engine, SessionLocal, get_db, Base
from .exceptions import WarehouseError, InsufficientStock, SourceNotFound, NotFound, Forbidden, InvalidInput
from .locks import item_locks

__all__ = [
    "settings", "engine", "SessionLocal", "get_db", "Base",
    "WarehouseError", "InsufficientStock", "SourceNotFound", "NotFound", "Forbidden", "InvalidInput",
    "item_locks",
]
