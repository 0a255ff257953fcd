"""
Warehouse Layout API
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List

from wms.core import get_db
from wms.models import User
from wms.schemas.warehouse import WarehouseZoneCreate, WarehouseZoneResponse
from wms.services import WarehouseService
from wms.services.warehouse_service import parse_location
from wms.api.auth import get_current_active_user, require_permission

router = APIRouter(prefix="/warehouse", tags=["warehouse"])


# ============== Layout ==============

@router.get("/layout", response_model=List[WarehouseZoneResponse])
def list_layout(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return WarehouseService.list_zones(db)


@router.post("/layout", response_model=WarehouseZoneResponse, status_code=status.HTTP_201_CREATED)
def create_zone(
    data: WarehouseZoneCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_warehouse"))
):
    return WarehouseService.create_zone(db, data)


@router.post("/layout/seed-default")
def seed_default_layout(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_warehouse"))
):
    """Default A-D layout, only when the layout is empty"""
    return {"created": WarehouseService.seed_default_layout(db)}


@router.put("/layout/{zone_id}", response_model=WarehouseZoneResponse)
def update_zone(
    zone_id: int,
    data: WarehouseZoneCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_warehouse"))
):
    zone = WarehouseService.update_zone(db, zone_id, data)
    if not zone:
        raise HTTPException(status_code=404, detail="Zone not found")
    return zone


@router.delete("/layout/{zone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_zone(
    zone_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_warehouse"))
):
    if not WarehouseService.delete_zone(db, zone_id):
        raise HTTPException(status_code=404, detail="Zone not found")


# ============== Location codes ==============

@router.get("/location/parse")
async def parse_location_code(
    location: str = Query(...),
    current_user: User = Depends(get_current_active_user)
):
    parsed = parse_location(location)
    return {"location": location, "valid": parsed is not None, "parsed": parsed}
