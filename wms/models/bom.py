"""
BOM Guide Model
"""
from sqlalchemy import Column, String, Integer
from wms.core import Base
from .base import IdMixin, CreatedAtMixin

class BomGuide(Base, IdMixin, CreatedAtMixin):
    """One required part line of an installation guide"""
    __tablename__ = "bom_guides"

    guide_name = Column(String(200), nullable=False, index=True)
    item_code = Column(String(100), nullable=False)
    required_quantity = Column(Integer, nullable=False)
