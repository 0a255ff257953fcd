"""
Attached Files API - evidence photos and uploaded sheets
"""
from fastapi import APIRouter, Depends, File, UploadFile, status
from typing import List, Dict, Any

from wms.models import User
from wms.schemas.upload import FileCleanupOptions, FileDeleteRequest, FileBackupRequest
from wms.services import FileService
from wms.api.auth import require_admin, require_permission

router = APIRouter(prefix="/files", tags=["files"])


@router.get("")
def list_files(current_user: User = Depends(require_admin)) -> List[Dict[str, Any]]:
    return FileService.list_files()


@router.get("/status")
def files_status(current_user: User = Depends(require_admin)):
    return FileService.status()


@router.get("/duplicates")
def find_duplicates(current_user: User = Depends(require_admin)):
    return FileService.find_duplicates()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    current_user: User = Depends(require_admin)
):
    return FileService.save_file(file.filename, file.file.read())


@router.post("/delete")
def delete_files(
    data: FileDeleteRequest,
    current_user: User = Depends(require_admin)
):
    return {"deleted": FileService.delete_files(data.file_ids)}


@router.post("/auto-cleanup")
def auto_cleanup(
    options: FileCleanupOptions,
    current_user: User = Depends(require_admin)
):
    return FileService.auto_cleanup(
        max_age_in_days=options.max_age_in_days,
        max_size_in_mb=options.max_size_in_mb,
        categories=options.categories,
        dry_run=options.dry_run
    )


@router.post("/backup")
def backup_files(
    data: FileBackupRequest,
    current_user: User = Depends(require_permission("can_backup_data"))
):
    backup_name = FileService.backup_files(data.target_files)
    return {"message": f"{len(data.target_files)}개 파일이 백업되었습니다.", "backup_name": backup_name}
