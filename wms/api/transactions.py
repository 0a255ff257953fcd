"""
Transactions API - stock movement ledger
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from wms.core import get_db
from wms.models import User
from wms.schemas.transaction import TransactionCreate, TransactionResponse, TransactionType
from wms.services import TransactionService
from wms.api.auth import get_current_active_user, require_permission

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionResponse])
def list_transactions(
    item_code: Optional[str] = Query(None),
    type: Optional[TransactionType] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=10000),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Newest first"""
    return TransactionService.list_transactions(db, item_code=item_code, type=type, limit=limit)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def post_transaction(
    data: TransactionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_process_transactions"))
):
    """
    Record a movement and apply it to stock in one step.
    Either both the ledger entry and the stock change land, or neither does.
    """
    return TransactionService.post_transaction(db, data, user_id=data.user_id or current_user.id)
