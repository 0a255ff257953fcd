"""
Inventory, Transaction Ledger & Exchange Queue Models
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, CheckConstraint
from wms.core import Base
from .base import IdMixin, CreatedAtMixin, TimestampMixin

class InventoryItem(Base, IdMixin, TimestampMixin):
    """Stock of one product code at one location (code is NOT unique)"""
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_inventory_items_stock_non_negative"),
    )

    code = Column(String(100), nullable=False, index=True)
    name = Column(String(300), nullable=False)
    category = Column(String(100), nullable=False, default="기타")
    manufacturer = Column(String(200))
    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)
    unit = Column(String(20), nullable=False, default="ea")
    location = Column(String(100), index=True)
    box_size = Column(Integer, default=1)

class Transaction(Base, IdMixin, CreatedAtMixin):
    """Append-only stock movement ledger"""
    __tablename__ = "transactions"

    type = Column(String(20), nullable=False, index=True)  # inbound, outbound, move, adjustment
    item_code = Column(String(100), nullable=False, index=True)
    item_name = Column(String(300), nullable=False)
    quantity = Column(Integer, nullable=False)
    from_location = Column(String(500))
    to_location = Column(String(500))
    reason = Column(String(200))
    memo = Column(Text)
    user_id = Column(Integer)

class ExchangeQueueItem(Base, IdMixin, CreatedAtMixin):
    """Defective-item batch waiting for its replacement to come back in"""
    __tablename__ = "exchange_queue"

    item_code = Column(String(100), nullable=False, index=True)
    item_name = Column(String(300), nullable=False)
    quantity = Column(Integer, nullable=False)
    outbound_date = Column(DateTime(timezone=True), nullable=False)
    processed = Column(Boolean, default=False, nullable=False)
    # Locations the exchange outbound drained, ", " separated; NULL when unknown
    source_locations = Column(String(500))
