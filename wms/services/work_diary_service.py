"""
Work Diary Service - visibility, status transitions and notification fan-out
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any, Callable
from datetime import datetime
import logging

from wms.core import NotFound, Forbidden
from wms.models import User, WorkDiary, WorkDiaryComment
from wms.schemas.work_diary import WorkDiaryCreate, WorkDiaryUpdate
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

# notify(db, user_id, diary_id, type, message, commit=False)
NotifySink = Callable[..., Any]

ADMIN_ROLES = ("admin", "super_admin")


def _is_assignee(diary: WorkDiary, user_id: int) -> bool:
    return user_id in (diary.assigned_to or [])


class WorkDiaryService:
    """Work diary state machine: pending -> in_progress (assignee reads) -> completed"""

    @staticmethod
    def can_view(db: Session, diary: WorkDiary, user: User, authors: Optional[Dict[int, User]] = None) -> bool:
        if user.role in ADMIN_ROLES:
            return True
        if diary.author_id == user.id or _is_assignee(diary, user.id):
            return True
        if diary.visibility == "private":
            return False
        if diary.visibility == "department":
            if authors is not None:
                author = authors.get(diary.author_id)
            else:
                author = db.query(User).filter(User.id == diary.author_id).first()
            return bool(user.department) and author is not None and author.department == user.department
        return True

    @staticmethod
    def _acknowledge(db: Session, diaries: List[WorkDiary], user: User, notify: NotifySink) -> int:
        """Pending diaries read by an assignee move to in_progress, one notice to the author each"""
        changed = 0
        for diary in diaries:
            if diary.status == "pending" and _is_assignee(diary, user.id):
                diary.status = "in_progress"
                notify(db, diary.author_id, diary.id, "status_change",
                       f"{user.username}님이 업무를 확인했습니다.", commit=False)
                logger.info(f"Diary {diary.id}: pending -> in_progress (read by {user.username})")
                changed += 1
        if changed:
            db.commit()
        return changed

    @staticmethod
    def list_diaries(
        db: Session,
        user: User,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        notify: Optional[NotifySink] = None
    ) -> List[WorkDiary]:
        """Diaries visible to the user, newest work date first"""
        query = db.query(WorkDiary)
        if start_date:
            query = query.filter(WorkDiary.work_date >= start_date)
        if end_date:
            query = query.filter(WorkDiary.work_date <= end_date)
        diaries = query.order_by(WorkDiary.work_date.desc(), WorkDiary.id.desc()).all()

        author_ids = {diary.author_id for diary in diaries}
        authors = {u.id: u for u in db.query(User).filter(User.id.in_(author_ids)).all()} if author_ids else {}
        visible = [diary for diary in diaries if WorkDiaryService.can_view(db, diary, user, authors)]

        WorkDiaryService._acknowledge(db, visible, user, notify or NotificationService.create_notification)
        return visible

    @staticmethod
    def get_diary(db: Session, diary_id: int, user: User, notify: Optional[NotifySink] = None) -> WorkDiary:
        diary = db.query(WorkDiary).filter(WorkDiary.id == diary_id).first()
        if not diary:
            raise NotFound("Work diary not found")
        if not WorkDiaryService.can_view(db, diary, user):
            raise Forbidden("조회 권한이 없습니다")
        WorkDiaryService._acknowledge(db, [diary], user, notify or NotificationService.create_notification)
        return diary

    @staticmethod
    def notification_targets(db: Session, diary: WorkDiary, author: User) -> List[int]:
        """Users told about a new diary, author excluded"""
        if diary.visibility == "private":
            targets = list(diary.assigned_to or [])
        elif diary.visibility == "department":
            targets = [u.id for u in db.query(User).filter(User.department == author.department).all()] \
                if author.department else []
        else:
            targets = [u.id for u in db.query(User).all()]
        seen = set()
        result = []
        for user_id in targets:
            if user_id != author.id and user_id not in seen:
                seen.add(user_id)
                result.append(user_id)
        return result

    @staticmethod
    def create_diary(
        db: Session,
        data: WorkDiaryCreate,
        author: User,
        notify: Optional[NotifySink] = None
    ) -> WorkDiary:
        notify = notify or NotificationService.create_notification
        diary = WorkDiary(
            title=data.title,
            content=data.content,
            category=data.category,
            priority=data.priority,
            status="pending",
            work_date=data.work_date,
            attachments=data.attachments,
            tags=data.tags,
            author_id=author.id,
            assigned_to=list(data.assigned_to),
            visibility=data.visibility
        )
        db.add(diary)
        db.flush()

        targets = WorkDiaryService.notification_targets(db, diary, author)
        for user_id in targets:
            notify(db, user_id, diary.id, "new_diary",
                   f"{author.username}님이 새로운 업무일지를 작성했습니다: {diary.title}", commit=False)
        db.commit()
        db.refresh(diary)
        logger.info(f"Diary {diary.id} '{diary.title}' created, {len(targets)} notification(s) ({diary.visibility})")
        return diary

    @staticmethod
    def update_diary(db: Session, diary_id: int, data: WorkDiaryUpdate, user: User) -> WorkDiary:
        """Author or admin only; status changes go through the state machine"""
        diary = db.query(WorkDiary).filter(WorkDiary.id == diary_id).first()
        if not diary:
            raise NotFound("Work diary not found")
        if diary.author_id != user.id and user.role not in ADMIN_ROLES:
            raise Forbidden("수정 권한이 없습니다")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(diary, field, value)
        db.commit()
        db.refresh(diary)
        return diary

    @staticmethod
    def complete_diary(db: Session, diary_id: int, user: User, notify: Optional[NotifySink] = None) -> Dict[str, Any]:
        notify = notify or NotificationService.create_notification
        diary = db.query(WorkDiary).filter(WorkDiary.id == diary_id).first()
        if not diary:
            raise NotFound("업무일지를 찾을 수 없습니다")
        if diary.status == "completed":
            return {"message": "이미 완료된 업무입니다", "already_completed": True}
        if not _is_assignee(diary, user.id):
            raise Forbidden("업무 완료 권한이 없습니다")

        diary.status = "completed"
        if diary.author_id != user.id:
            notify(db, diary.author_id, diary.id, "status_change",
                   f"{user.username}님이 업무를 완료했습니다: {diary.title}", commit=False)
        db.commit()
        logger.info(f"Diary {diary.id} completed by {user.username}")
        return {"message": "업무가 완료 처리되었습니다", "already_completed": False}

    @staticmethod
    def delete_diary(db: Session, diary_id: int) -> bool:
        diary = db.query(WorkDiary).filter(WorkDiary.id == diary_id).first()
        if not diary:
            return False
        db.query(WorkDiaryComment).filter(WorkDiaryComment.diary_id == diary_id).delete(synchronize_session=False)
        db.delete(diary)
        db.commit()
        return True

    # ============== Comments ==============

    @staticmethod
    def list_comments(db: Session, diary_id: int) -> List[WorkDiaryComment]:
        """Oldest first"""
        return db.query(WorkDiaryComment).filter(
            WorkDiaryComment.diary_id == diary_id
        ).order_by(WorkDiaryComment.created_at, WorkDiaryComment.id).all()

    @staticmethod
    def add_comment(
        db: Session,
        diary_id: int,
        content: str,
        author: User,
        notify: Optional[NotifySink] = None
    ) -> WorkDiaryComment:
        notify = notify or NotificationService.create_notification
        diary = db.query(WorkDiary).filter(WorkDiary.id == diary_id).first()
        if not diary:
            raise NotFound("Work diary not found")

        comment = WorkDiaryComment(diary_id=diary_id, content=content, author_id=author.id)
        db.add(comment)
        if diary.author_id != author.id:
            notify(db, diary.author_id, diary.id, "comment",
                   f"{author.username}님이 댓글을 남겼습니다: {diary.title}", commit=False)
        db.commit()
        db.refresh(comment)
        return comment

    @staticmethod
    def delete_comment(db: Session, comment_id: int) -> bool:
        comment = db.query(WorkDiaryComment).filter(WorkDiaryComment.id == comment_id).first()
        if not comment:
            return False
        db.delete(comment)
        db.commit()
        return True
