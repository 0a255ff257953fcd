"""
Inventory API
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List, Optional

from wms.core import get_db
from wms.models import User
from wms.schemas.inventory import (
    InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse,
    StockAdjustRequest, StockAdjustResult, InventoryAlert,
)
from wms.services import InventoryService
from wms.api.auth import get_current_active_user, require_admin

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=List[InventoryItemResponse])
def list_inventory(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return InventoryService.list_items(db, search, category, location)


@router.get("/alerts", response_model=List[InventoryAlert])
def inventory_alerts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return InventoryService.low_stock_alerts(db)


@router.get("/{code}", response_model=List[InventoryItemResponse])
def get_item_rows(
    code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Every location row of a product code"""
    rows = InventoryService.get_rows_for_code(db, code)
    if not rows:
        raise HTTPException(status_code=404, detail="Item not found")
    return rows


@router.post("", response_model=InventoryItemResponse)
def create_item(
    data: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Register stock: merged into the first row of the code when it exists"""
    item, created = InventoryService.merge_inbound(db, data.model_dump())
    body = InventoryItemResponse.model_validate(item).model_dump(mode="json")
    return JSONResponse(status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK, content=body)


@router.patch("/items/{item_id}", response_model=InventoryItemResponse)
def update_item_by_id(
    item_id: int,
    data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    item = InventoryService.update_by_id(db, item_id, data.model_dump(exclude_unset=True))
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.patch("/items/{item_id}/adjust", response_model=StockAdjustResult)
def adjust_item_stock(
    item_id: int,
    data: StockAdjustRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return InventoryService.adjust_stock(db, item_id, data.new_stock, data.reason, current_user.id)


@router.patch("/{code}", response_model=InventoryItemResponse)
def update_item(
    code: str,
    data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Update the first row of the code"""
    item = InventoryService.update_by_code(db, code, data.model_dump(exclude_unset=True))
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item_by_id(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    if not InventoryService.delete_by_id(db, item_id):
        raise HTTPException(status_code=404, detail="Item not found")


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete every row of the code"""
    if not InventoryService.delete(db, code):
        raise HTTPException(status_code=404, detail="Item not found")
