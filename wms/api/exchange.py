"""
Exchange Queue API - defective items waiting for replacement
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from wms.core import get_db
from wms.models import User
from wms.schemas.transaction import ExchangeQueueResponse
from wms.services import ExchangeService
from wms.api.auth import require_permission

router = APIRouter(prefix="/exchange-queue", tags=["exchange"])


@router.get("", response_model=List[ExchangeQueueResponse])
def list_pending(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_process_exchange"))
):
    return ExchangeService.list_pending(db)


@router.post("/{entry_id}/process")
def process_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_process_exchange"))
):
    if not ExchangeService.process(db, entry_id, user_id=current_user.id):
        raise HTTPException(status_code=404, detail="교환 대기 항목을 찾을 수 없거나 이미 처리되었습니다.")
    return {"message": "교환 처리 완료", "id": entry_id}
