"""
Work Diary API
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from wms.core import get_db
from wms.models import User
from wms.schemas.work_diary import (
    WorkDiaryCreate, WorkDiaryUpdate, WorkDiaryResponse, CommentCreate, CommentResponse,
)
from wms.services import WorkDiaryService
from wms.api.auth import get_current_active_user, require_permission

router = APIRouter(prefix="/work-diary", tags=["work-diary"])


@router.get("", response_model=List[WorkDiaryResponse])
def list_diaries(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Visible diaries; reading marks pending assignments as in progress"""
    return WorkDiaryService.list_diaries(db, current_user, start_date, end_date)


@router.get("/{diary_id}", response_model=WorkDiaryResponse)
def get_diary(
    diary_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return WorkDiaryService.get_diary(db, diary_id, current_user)


@router.post("", response_model=WorkDiaryResponse, status_code=status.HTTP_201_CREATED)
def create_diary(
    data: WorkDiaryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_create_diary"))
):
    return WorkDiaryService.create_diary(db, data, current_user)


@router.patch("/{diary_id}", response_model=WorkDiaryResponse)
def update_diary(
    diary_id: int,
    data: WorkDiaryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_edit_diary"))
):
    return WorkDiaryService.update_diary(db, diary_id, data, current_user)


@router.post("/{diary_id}/complete")
def complete_diary(
    diary_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return WorkDiaryService.complete_diary(db, diary_id, current_user)


@router.delete("/{diary_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_diary(
    diary_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_delete_diary"))
):
    if not WorkDiaryService.delete_diary(db, diary_id):
        raise HTTPException(status_code=404, detail="Work diary not found")


# ============== Comments ==============

@router.get("/{diary_id}/comments", response_model=List[CommentResponse])
def list_comments(
    diary_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    WorkDiaryService.get_diary(db, diary_id, current_user)
    return WorkDiaryService.list_comments(db, diary_id)


@router.post("/{diary_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    diary_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return WorkDiaryService.add_comment(db, diary_id, data.content, current_user)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_delete_diary"))
):
    if not WorkDiaryService.delete_comment(db, comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
