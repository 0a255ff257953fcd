"""
File Service - attached assets directory (evidence photos, uploaded sheets, backups)
"""
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import json
import logging
import os
import re
import shutil
import time

from wms.core import settings, InvalidInput, NotFound

logger = logging.getLogger(__name__)

TEMP_MAX_AGE_SECONDS = 24 * 60 * 60
TIMESTAMP_SUFFIX = re.compile(r"_\d{10,}")
GENERIC_NAMES = re.compile(r"^(image|file|document)$")

FILE_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xls": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
    "txt": "text/plain",
    "json": "application/json",
}


def file_category(filename: str) -> str:
    lowered = filename.lower()
    if "bom" in lowered:
        return "bom"
    if "backup" in lowered or "백업" in filename:
        return "backup"
    if "sync" in lowered or "동기화" in filename:
        return "sync"
    if "master" in lowered or "제품" in filename:
        return "master"
    if "temp" in lowered or "임시" in filename:
        return "temp"
    return "evidence"


def file_type(filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return FILE_TYPES.get(ext, "application/octet-stream")


def strip_timestamp(filename: str) -> str:
    return TIMESTAMP_SUFFIX.sub("", filename)


def format_bytes(size: int) -> str:
    if size == 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


class FileService:
    """Flat directory of attached files; the file name is the file id"""

    @staticmethod
    def base_dir(base_dir: Optional[str] = None) -> str:
        return os.path.abspath(base_dir or settings.FILES_PATH)

    @staticmethod
    def _safe_path(file_id: str, base_dir: Optional[str] = None) -> str:
        if not file_id or os.path.basename(file_id) != file_id or file_id in (".", ".."):
            raise InvalidInput(f"Invalid file id: {file_id}")
        return os.path.join(FileService.base_dir(base_dir), file_id)

    @staticmethod
    def list_files(base_dir: Optional[str] = None) -> List[Dict[str, Any]]:
        """Files with category/type metadata, newest first"""
        directory = FileService.base_dir(base_dir)
        if not os.path.isdir(directory):
            return []

        files = []
        for filename in os.listdir(directory):
            path = os.path.join(directory, filename)
            if not os.path.isfile(path):
                continue
            stats = os.stat(path)
            files.append({
                "id": filename,
                "name": filename,
                "original_name": filename,
                "size": stats.st_size,
                "type": file_type(filename),
                "category": file_category(filename),
                "upload_date": datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                "url": f"/attached_assets/{filename}",
            })
        files.sort(key=lambda f: f["upload_date"], reverse=True)
        return files

    @staticmethod
    def save_file(filename: str, content: bytes, base_dir: Optional[str] = None) -> Dict[str, Any]:
        """Store an uploaded file; an existing name gets a _<unix time> suffix"""
        name = os.path.basename(filename or "")
        if not name:
            raise InvalidInput("File name is required")
        directory = FileService.base_dir(base_dir)
        os.makedirs(directory, exist_ok=True)

        path = os.path.join(directory, name)
        if os.path.exists(path):
            stem, ext = os.path.splitext(name)
            name = f"{stem}_{int(time.time())}{ext}"
            path = os.path.join(directory, name)

        with open(path, "wb") as f:
            f.write(content)
        logger.info(f"Stored file {name} ({format_bytes(len(content))})")
        return {"id": name, "size": len(content), "category": file_category(name), "type": file_type(name)}

    @staticmethod
    def delete_files(file_ids: List[str], base_dir: Optional[str] = None) -> int:
        deleted = 0
        for file_id in file_ids:
            path = FileService._safe_path(file_id, base_dir)
            try:
                os.remove(path)
                deleted += 1
                logger.info(f"Deleted file {file_id}")
            except FileNotFoundError:
                logger.warning(f"File to delete not found: {file_id}")
        return deleted

    @staticmethod
    def should_delete(file: Dict[str, Any], now: datetime, max_age_seconds: float, max_size_bytes: int, categories: List[str]) -> bool:
        if file["category"] not in categories:
            return False
        age = (now - file["upload_date"]).total_seconds()
        if file["category"] == "temp":
            return age > TEMP_MAX_AGE_SECONDS
        if file["category"] == "evidence":
            return age > max_age_seconds or file["size"] > max_size_bytes
        return False

    @staticmethod
    def auto_cleanup(
        max_age_in_days: Optional[int] = None,
        max_size_in_mb: Optional[int] = None,
        categories: Optional[List[str]] = None,
        dry_run: bool = False,
        base_dir: Optional[str] = None
    ) -> Dict[str, Any]:
        """Delete old temp files and old or oversized evidence files"""
        max_age_in_days = settings.FILE_CLEANUP_MAX_AGE_DAYS if max_age_in_days is None else max_age_in_days
        max_size_in_mb = settings.FILE_CLEANUP_MAX_SIZE_MB if max_size_in_mb is None else max_size_in_mb
        categories = categories if categories is not None else ["evidence", "temp"]

        now = datetime.now(timezone.utc)
        result = {"deleted_files": [], "saved_space": 0, "errors": []}
        for file in FileService.list_files(base_dir):
            if not FileService.should_delete(file, now, max_age_in_days * 86400, max_size_in_mb * 1024 * 1024, categories):
                continue
            if dry_run:
                result["deleted_files"].append(f"[DRY RUN] {file['id']}")
                result["saved_space"] += file["size"]
                continue
            try:
                os.remove(FileService._safe_path(file["id"], base_dir))
                result["deleted_files"].append(file["id"])
                result["saved_space"] += file["size"]
            except OSError as e:
                result["errors"].append(f"{file['id']}: {e}")

        logger.info(f"Auto cleanup: {len(result['deleted_files'])} file(s), {format_bytes(result['saved_space'])} freed")
        return result

    @staticmethod
    def find_duplicates(base_dir: Optional[str] = None) -> Dict[str, Any]:
        """Files sharing a base name once the timestamp suffix is removed; the newest is kept"""
        groups: Dict[str, List[Dict[str, Any]]] = {}
        for file in FileService.list_files(base_dir):
            base_name = strip_timestamp(file["original_name"])
            if len(base_name) > 5 and not GENERIC_NAMES.match(base_name):
                groups.setdefault(base_name, []).append(file)

        duplicates = []
        for group in groups.values():
            if len(group) < 2:
                continue
            group.sort(key=lambda f: f["upload_date"], reverse=True)
            duplicates.extend(group[1:])
        return {"duplicates": duplicates, "total_size": sum(f["size"] for f in duplicates)}

    @staticmethod
    def status(base_dir: Optional[str] = None) -> Dict[str, Any]:
        files = FileService.list_files(base_dir)
        breakdown: Dict[str, Dict[str, int]] = {}
        for file in files:
            entry = breakdown.setdefault(file["category"], {"count": 0, "size": 0})
            entry["count"] += 1
            entry["size"] += file["size"]
        return {
            "total_files": len(files),
            "total_size": sum(f["size"] for f in files),
            "category_breakdown": breakdown,
            "oldest_file": min(files, key=lambda f: f["upload_date"]) if files else None,
            "newest_file": max(files, key=lambda f: f["upload_date"]) if files else None,
            "largest_file": max(files, key=lambda f: f["size"]) if files else None,
        }

    @staticmethod
    def backup_files(target_files: List[str], base_dir: Optional[str] = None) -> str:
        """Copy files into backups/backup_<timestamp>/ with a metadata.json"""
        if not target_files:
            raise InvalidInput("백업할 파일을 선택해주세요.")
        now = datetime.now(timezone.utc)
        backup_name = "backup_" + re.sub(r"[:.]", "-", now.isoformat())
        backup_path = os.path.join(FileService.base_dir(base_dir), "backups", backup_name)

        sources = []
        for file_id in target_files:
            source = FileService._safe_path(file_id, base_dir)
            if not os.path.isfile(source):
                raise NotFound(f"File not found: {file_id}")
            sources.append((file_id, source))

        os.makedirs(backup_path, exist_ok=True)
        for file_id, source in sources:
            shutil.copy2(source, os.path.join(backup_path, file_id))

        with open(os.path.join(backup_path, "metadata.json"), "w", encoding="utf-8") as f:
            json.dump({
                "created_at": now.isoformat(),
                "files": list(target_files),
                "total_files": len(target_files),
            }, f, ensure_ascii=False, indent=2)

        logger.info(f"Backup {backup_name}: {len(target_files)} file(s)")
        return backup_name
