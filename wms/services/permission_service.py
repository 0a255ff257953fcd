"""
Permission Resolver - role templates + tri-state per-user overrides
"""
from typing import Dict, List, Optional
import logging

from wms.core import InvalidInput
from wms.models import User

logger = logging.getLogger(__name__)

ROLE_HIERARCHY = {
    "super_admin": 4,
    "admin": 3,
    "manager": 2,
    "user": 1,
    "viewer": 0,
}

PERMISSION_KEYS = [
    "can_upload_bom", "can_upload_master", "can_upload_inventory_add", "can_upload_inventory_sync",
    "can_access_excel_management", "can_backup_data", "can_restore_data", "can_reset_data",
    "can_manage_users", "can_manage_permissions", "can_download_inventory", "can_download_transactions",
    "can_download_bom", "can_download_all", "can_manage_inventory", "can_process_transactions",
    "can_manage_bom", "can_manage_warehouse", "can_process_exchange", "can_manage_location",
    "can_create_diary", "can_edit_diary", "can_delete_diary", "can_view_reports",
]

# Only super_admin may exercise these, whatever the overrides say
CRITICAL_PERMISSIONS = frozenset({
    "can_reset_data",
    "can_upload_inventory_sync",
    "can_restore_data",
    "can_manage_permissions",
})

ROLE_PERMISSIONS: Dict[str, Dict[str, bool]] = {
    "super_admin": {key: True for key in PERMISSION_KEYS},
    "admin": {
        **{key: True for key in PERMISSION_KEYS},
        "can_reset_data": False,
        "can_manage_permissions": False,
    },
    "manager": {
        **{key: True for key in PERMISSION_KEYS},
        "can_reset_data": False,
        "can_restore_data": False,
        "can_manage_users": False,
        "can_manage_permissions": False,
        "can_upload_inventory_sync": False,
        "can_download_all": False,
        "can_delete_diary": False,
    },
    "user": {
        **{key: False for key in PERMISSION_KEYS},
        "can_upload_inventory_add": True,
        "can_access_excel_management": True,
        "can_process_transactions": True,
        "can_download_inventory": True,
        "can_download_bom": True,
        "can_create_diary": True,
        "can_edit_diary": True,
        "can_view_reports": True,
    },
    "viewer": {
        **{key: False for key in PERMISSION_KEYS},
        # Read access to inventory and BOM screens
        "can_manage_inventory": True,
        "can_manage_bom": True,
        "can_view_reports": True,
    },
}

PERMISSION_CATEGORIES = {
    "system": {
        "title": "시스템 관리",
        "permissions": [
            {"key": "can_reset_data", "label": "시스템 초기화", "description": "모든 데이터를 초기화합니다 (매우 위험)"},
            {"key": "can_restore_data", "label": "데이터 복원", "description": "백업 데이터를 복원합니다"},
            {"key": "can_manage_users", "label": "사용자 관리", "description": "사용자 생성, 수정, 삭제 권한"},
            {"key": "can_manage_permissions", "label": "권한 관리", "description": "사용자 권한 설정 및 관리"},
            {"key": "can_backup_data", "label": "데이터 백업", "description": "시스템 데이터 백업 생성"},
        ],
    },
    "excel": {
        "title": "Excel 관리",
        "permissions": [
            {"key": "can_upload_bom", "label": "BOM 업로드", "description": "BOM 데이터 엑셀 업로드"},
            {"key": "can_upload_master", "label": "제품 마스터 업로드", "description": "제품 마스터 데이터 업로드"},
            {"key": "can_upload_inventory_add", "label": "재고 추가/보충", "description": "재고 추가 및 보충 업로드"},
            {"key": "can_upload_inventory_sync", "label": "전체 동기화", "description": "전체 재고 동기화 (위험)"},
            {"key": "can_access_excel_management", "label": "Excel 관리 페이지 접근", "description": "Excel 관리 페이지 접근 권한"},
        ],
    },
    "inventory": {
        "title": "재고 관리",
        "permissions": [
            {"key": "can_manage_inventory", "label": "재고 관리", "description": "재고 항목 관리 권한"},
            {"key": "can_process_transactions", "label": "입출고 처리", "description": "입출고 트랜잭션 처리"},
            {"key": "can_manage_bom", "label": "BOM 관리", "description": "BOM 데이터 관리"},
            {"key": "can_manage_warehouse", "label": "창고 관리", "description": "창고 레이아웃 및 설정 관리"},
            {"key": "can_process_exchange", "label": "불량품 교환", "description": "불량품 교환 프로세스 관리"},
            {"key": "can_manage_location", "label": "위치 관리", "description": "창고 위치 정보 관리"},
        ],
    },
    "download": {
        "title": "다운로드",
        "permissions": [
            {"key": "can_download_inventory", "label": "재고 현황", "description": "재고 현황 데이터 다운로드"},
            {"key": "can_download_transactions", "label": "트랜잭션 이력", "description": "트랜잭션 이력 다운로드"},
            {"key": "can_download_bom", "label": "BOM 데이터", "description": "BOM 데이터 다운로드"},
            {"key": "can_download_all", "label": "전체 데이터", "description": "모든 시스템 데이터 다운로드"},
        ],
    },
    "diary": {
        "title": "업무일지",
        "permissions": [
            {"key": "can_create_diary", "label": "업무일지 작성", "description": "새로운 업무일지 작성"},
            {"key": "can_edit_diary", "label": "업무일지 수정", "description": "기존 업무일지 수정"},
            {"key": "can_delete_diary", "label": "업무일지 삭제", "description": "업무일지 삭제 권한"},
            {"key": "can_view_reports", "label": "리포트 조회", "description": "업무일지 리포트 및 통계 조회"},
        ],
    },
}


def role_defaults(role: Optional[str]) -> Dict[str, bool]:
    """Permission template for a role (viewer for unknown roles)"""
    return dict(ROLE_PERMISSIONS.get(role or "", ROLE_PERMISSIONS["viewer"]))


def explicit_overrides(user: User) -> Dict[str, bool]:
    """Only the flags explicitly set on the user"""
    overrides = {}
    for key in PERMISSION_KEYS:
        value = getattr(user, key, None)
        if value is not None:
            overrides[key] = bool(value)
    return overrides


def resolve_permissions(user: User) -> Dict[str, bool]:
    """Effective permissions: role template overlaid with the user's overrides"""
    permissions = role_defaults(user.role)
    permissions.update(explicit_overrides(user))
    return permissions


def check_permission(user: User, key: str) -> bool:
    return resolve_permissions(user).get(key, False)


def check_critical_permission(user: User, key: str) -> bool:
    """Permission check plus super_admin requirement for critical keys"""
    if not check_permission(user, key):
        return False
    if key in CRITICAL_PERMISSIONS:
        return user.role == "super_admin"
    return True


def has_role_at_least(user: User, role: str) -> bool:
    return ROLE_HIERARCHY.get(user.role, 0) >= ROLE_HIERARCHY.get(role, 0)


def validate_permission_keys(keys: List[str]) -> None:
    unknown = [key for key in keys if key not in PERMISSION_KEYS]
    if unknown:
        raise InvalidInput(f"Unknown permission keys: {', '.join(unknown)}")


def apply_overrides(user: User, overrides: Dict[str, Optional[bool]]) -> None:
    """Set tri-state overrides on the user; None puts a flag back to inherit"""
    validate_permission_keys(list(overrides.keys()))
    for key, value in overrides.items():
        setattr(user, key, value)


def reset_user_permissions(user: User) -> None:
    """Clear every override so the user inherits the role template again"""
    for key in PERMISSION_KEYS:
        setattr(user, key, None)


def change_user_role(user: User, role: str) -> None:
    """Switch role; the previous overrides are dropped"""
    if role not in ROLE_HIERARCHY:
        raise InvalidInput(f"Unknown role: {role}")
    logger.info(f"Role change for {user.username}: {user.role} -> {role}")
    user.role = role
    reset_user_permissions(user)
