"""
Spreadsheet Upload API

The client parses the Excel sheet and posts its rows as JSON objects.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wms.core import get_db
from wms.models import User
from wms.schemas.upload import UploadRequest
from wms.services import UploadService
from wms.api.auth import require_permission, require_critical_permission

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/master")
def upload_master(
    data: UploadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_upload_master"))
):
    return UploadService.upload_master(db, data.items)


@router.post("/bom")
def upload_bom(
    data: UploadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_upload_bom"))
):
    return UploadService.upload_bom(db, data.items)


@router.post("/inventory-add")
def upload_inventory_add(
    data: UploadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_upload_inventory_add"))
):
    return UploadService.upload_inventory_add(db, data.items)


@router.post("/inventory-sync")
def upload_inventory_sync(
    data: UploadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_critical_permission("can_upload_inventory_sync"))
):
    """Full replacement of the inventory table"""
    return UploadService.upload_inventory_sync(db, data.items)
