"""
User Model - role + tri-state permission overrides
"""
from sqlalchemy import Column, String, Boolean
from wms.core import Base
from .base import IdMixin, CreatedAtMixin

class User(Base, IdMixin, CreatedAtMixin):
    """Application User

    Every can_* column is a nullable override: None inherits the role default,
    True/False replaces it.
    """
    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="viewer")  # super_admin, admin, manager, user, viewer
    department = Column(String(100))
    position = Column(String(100))
    is_manager = Column(Boolean, default=False)

    # Excel
    can_upload_bom = Column(Boolean, nullable=True)
    can_upload_master = Column(Boolean, nullable=True)
    can_upload_inventory_add = Column(Boolean, nullable=True)
    can_upload_inventory_sync = Column(Boolean, nullable=True)
    can_access_excel_management = Column(Boolean, nullable=True)

    # Data / system
    can_backup_data = Column(Boolean, nullable=True)
    can_restore_data = Column(Boolean, nullable=True)
    can_reset_data = Column(Boolean, nullable=True)
    can_manage_users = Column(Boolean, nullable=True)
    can_manage_permissions = Column(Boolean, nullable=True)

    # Downloads
    can_download_inventory = Column(Boolean, nullable=True)
    can_download_transactions = Column(Boolean, nullable=True)
    can_download_bom = Column(Boolean, nullable=True)
    can_download_all = Column(Boolean, nullable=True)

    # Inventory
    can_manage_inventory = Column(Boolean, nullable=True)
    can_process_transactions = Column(Boolean, nullable=True)
    can_manage_bom = Column(Boolean, nullable=True)
    can_manage_warehouse = Column(Boolean, nullable=True)
    can_process_exchange = Column(Boolean, nullable=True)
    can_manage_location = Column(Boolean, nullable=True)

    # Work diary
    can_create_diary = Column(Boolean, nullable=True)
    can_edit_diary = Column(Boolean, nullable=True)
    can_delete_diary = Column(Boolean, nullable=True)
    can_view_reports = Column(Boolean, nullable=True)
