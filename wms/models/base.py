"""
Base Model Mixins
"""
from sqlalchemy import Column, Integer, DateTime, func

class IdMixin:
    """Mixin for integer surrogate primary key"""
    id = Column(Integer, primary_key=True, autoincrement=True)

class CreatedAtMixin:
    """Mixin for created_at timestamp"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at timestamps"""
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
