"""
CSV Export API
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from urllib.parse import quote
import io

from wms.core import get_db
from wms.models import User
from wms.schemas.transaction import TransactionType
from wms.services import ExportService
from wms.api.auth import require_any_permission

router = APIRouter(prefix="/export", tags=["export"])


def csv_response(content: str, prefix: str) -> StreamingResponse:
    """UTF-8 with BOM so Excel opens the Korean headers correctly"""
    filename = f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8-sig")),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}
    )


@router.get("/inventory")
def export_inventory(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_any_permission("can_download_inventory", "can_download_all"))
):
    return csv_response(ExportService.inventory_csv(db), "재고현황")


@router.get("/transactions")
def export_transactions(
    item_code: Optional[str] = Query(None),
    type: Optional[TransactionType] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_any_permission("can_download_transactions", "can_download_all"))
):
    return csv_response(ExportService.transactions_csv(db, item_code=item_code, type=type), "거래내역")


@router.get("/bom")
def export_bom(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_any_permission("can_download_bom", "can_download_all"))
):
    return csv_response(ExportService.bom_csv(db), "BOM")
