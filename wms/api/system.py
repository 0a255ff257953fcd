"""
System API - data reset, backup and restore
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from wms.core import get_db
from wms.models import User
from wms.schemas.upload import BackupPayload
from wms.services import SystemService
from wms.api.auth import require_permission, require_critical_permission

router = APIRouter(prefix="/system", tags=["system"])
logger = logging.getLogger(__name__)


@router.post("/reset")
def reset_data(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_critical_permission("can_reset_data"))
):
    logger.warning(f"Data reset requested by {current_user.username}")
    return {"message": "모든 데이터가 초기화되었습니다.", "deleted": SystemService.reset_all_data(db)}


@router.get("/backup")
def export_backup(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_backup_data"))
):
    return SystemService.export_backup(db)


@router.post("/restore")
def restore_backup(
    data: BackupPayload,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_critical_permission("can_restore_data"))
):
    logger.warning(f"Backup restore requested by {current_user.username}")
    return SystemService.restore_backup(db, data.inventory, data.transactions, data.bom_guides)
