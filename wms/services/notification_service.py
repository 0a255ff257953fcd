"""
Notification Service - work diary notifications
"""
from sqlalchemy.orm import Session
from typing import List
import logging

from wms.core import NotFound
from wms.models import WorkNotification

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def create_notification(
        db: Session,
        user_id: int,
        diary_id: int,
        type: str,
        message: str,
        commit: bool = True
    ) -> WorkNotification:
        notification = WorkNotification(
            user_id=user_id,
            diary_id=diary_id,
            type=type,
            message=message,
            read=False
        )
        db.add(notification)
        if commit:
            db.commit()
            db.refresh(notification)
        else:
            db.flush()
        return notification

    @staticmethod
    def list_for_user(db: Session, user_id: int) -> List[WorkNotification]:
        """Newest first"""
        return db.query(WorkNotification).filter(
            WorkNotification.user_id == user_id
        ).order_by(WorkNotification.created_at.desc(), WorkNotification.id.desc()).all()

    @staticmethod
    def unread_count(db: Session, user_id: int) -> int:
        return db.query(WorkNotification).filter(
            WorkNotification.user_id == user_id,
            WorkNotification.read == False
        ).count()

    @staticmethod
    def mark_read(db: Session, notification_id: int, user_id: int) -> WorkNotification:
        """Mark one of the user's own notifications as read"""
        notification = db.query(WorkNotification).filter(
            WorkNotification.id == notification_id,
            WorkNotification.user_id == user_id
        ).first()
        if not notification:
            raise NotFound("Notification not found")
        notification.read = True
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def mark_all_read(db: Session, user_id: int) -> int:
        count = db.query(WorkNotification).filter(
            WorkNotification.user_id == user_id,
            WorkNotification.read == False
        ).update({"read": True}, synchronize_session=False)
        db.commit()
        return count
