"""
Work Diary, Comment & Notification Models
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, JSON
from wms.core import Base
from .base import IdMixin, CreatedAtMixin, TimestampMixin

class WorkDiary(Base, IdMixin, TimestampMixin):
    """Work diary entry"""
    __tablename__ = "work_diary"

    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default="기타")  # 입고, 출고, 재고조사, 설비점검, 기타
    priority = Column(String(20), nullable=False, default="normal")  # low, normal, high, urgent
    status = Column(String(20), nullable=False, default="pending")  # pending, in_progress, completed
    work_date = Column(DateTime(timezone=True), nullable=False, index=True)
    attachments = Column(JSON)
    tags = Column(JSON)
    author_id = Column(Integer, nullable=False, index=True)
    assigned_to = Column(JSON)  # [user_id, ...]
    visibility = Column(String(20), nullable=False, default="department")  # private, department, public

class WorkDiaryComment(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "work_diary_comments"

    diary_id = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, nullable=False)

class WorkNotification(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "work_notifications"

    user_id = Column(Integer, nullable=False, index=True)
    diary_id = Column(Integer, nullable=False)
    type = Column(String(20), nullable=False)  # new_diary, status_change, comment, mention
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
