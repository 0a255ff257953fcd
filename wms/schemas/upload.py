"""
Upload, Backup & File Management Schemas
"""
from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional

class UploadRequest(BaseModel):
    # Rows already parsed from the spreadsheet; Korean or English column keys
    items: List[Dict[str, Any]]

class BackupPayload(BaseModel):
    inventory: List[Dict[str, Any]] = []
    transactions: List[Dict[str, Any]] = []
    bom_guides: List[Dict[str, Any]] = []

class FileCleanupOptions(BaseModel):
    max_age_in_days: Optional[int] = Field(default=None, ge=0)
    max_size_in_mb: Optional[int] = Field(default=None, ge=0)
    categories: List[str] = ["evidence", "temp"]
    dry_run: bool = False

class FileDeleteRequest(BaseModel):
    file_ids: List[str]

class FileBackupRequest(BaseModel):
    target_files: List[str]
