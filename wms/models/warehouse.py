"""
Warehouse Layout Model
"""
from sqlalchemy import Column, String, JSON
from wms.core import Base
from .base import IdMixin, CreatedAtMixin

class WarehouseZone(Base, IdMixin, CreatedAtMixin):
    """Zone / sub-zone rack with its floors"""
    __tablename__ = "warehouse_layout"

    zone_name = Column(String(100), nullable=False)
    sub_zone_name = Column(String(100), nullable=False)
    floors = Column(JSON, nullable=False)  # [1, 2, 3, ...]
