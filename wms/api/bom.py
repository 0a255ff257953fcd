"""
BOM Guides API
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from wms.core import get_db
from wms.models import User
from wms.schemas.bom import BomGuideCreate, BomGuideResponse, BomCheckResult
from wms.services import BomService
from wms.api.auth import require_admin, require_any_permission

router = APIRouter(prefix="/bom", tags=["bom"])

can_read_bom = require_any_permission("can_manage_bom", "can_view_reports")


@router.get("", response_model=List[BomGuideResponse])
def list_guides(
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read_bom)
):
    return BomService.list_guides(db)


@router.get("/names", response_model=List[str])
def guide_names(
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read_bom)
):
    return BomService.guide_names(db)


@router.get("/{guide_name}", response_model=List[BomGuideResponse])
def get_guide(
    guide_name: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read_bom)
):
    lines = BomService.get_guide(db, guide_name)
    if not lines:
        raise HTTPException(status_code=404, detail="Guide not found")
    return lines


@router.get("/{guide_name}/check", response_model=List[BomCheckResult])
def check_guide(
    guide_name: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read_bom)
):
    """Required vs. current stock for each part of the guide"""
    return BomService.check_guide(db, guide_name)


@router.post("", response_model=BomGuideResponse, status_code=status.HTTP_201_CREATED)
def create_line(
    data: BomGuideCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return BomService.create(db, data)


@router.delete("/{guide_name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guide(
    guide_name: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    if not BomService.delete_guide(db, guide_name):
        raise HTTPException(status_code=404, detail="Guide not found")
