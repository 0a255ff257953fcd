"""
Notifications API - the current user's work diary notifications
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from wms.core import get_db
from wms.models import User
from wms.schemas.work_diary import NotificationResponse
from wms.services import NotificationService
from wms.api.auth import get_current_active_user

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return NotificationService.list_for_user(db, current_user.id)


@router.get("/unread-count")
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return {"count": NotificationService.unread_count(db, current_user.id)}


@router.post("/read-all")
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return {"updated": NotificationService.mark_all_read(db, current_user.id)}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return NotificationService.mark_read(db, notification_id, current_user.id)
