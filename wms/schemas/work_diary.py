"""
Work Diary & Notification Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Any
from datetime import datetime

Priority = Literal["low", "normal", "high", "urgent"]
DiaryStatus = Literal["pending", "in_progress", "completed"]
Visibility = Literal["private", "department", "public"]
NotificationType = Literal["new_diary", "status_change", "comment", "mention"]

class WorkDiaryCreate(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category: str = "기타"
    priority: Priority = "normal"
    work_date: datetime
    attachments: Optional[List[Any]] = None
    tags: Optional[List[str]] = None
    assigned_to: List[int] = []
    visibility: Visibility = "department"

class WorkDiaryUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    work_date: Optional[datetime] = None
    attachments: Optional[List[Any]] = None
    tags: Optional[List[str]] = None
    assigned_to: Optional[List[int]] = None
    visibility: Optional[Visibility] = None

class WorkDiaryResponse(BaseModel):
    id: int
    title: str
    content: str
    category: str
    priority: str
    status: str
    work_date: datetime
    attachments: Optional[List[Any]] = None
    tags: Optional[List[str]] = None
    author_id: int
    assigned_to: Optional[List[int]] = None
    visibility: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CommentCreate(BaseModel):
    content: str = Field(min_length=1)

class CommentResponse(BaseModel):
    id: int
    diary_id: int
    content: str
    author_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class NotificationCreate(BaseModel):
    user_id: int
    diary_id: int
    type: NotificationType
    message: str

class NotificationResponse(BaseModel):
    id: int
    user_id: int
    diary_id: int
    type: str
    message: str
    read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
