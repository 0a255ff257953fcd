"""
Users & Permissions API
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from wms.core import get_db
from wms.models import User
from wms.schemas.user import UserCreate, UserUpdate, PermissionUpdate, RoleChange, UserResponse
from wms.services import UserService, permission_service
from wms.services.user_service import user_to_dict
from wms.api.auth import require_permission, require_critical_permission

router = APIRouter(prefix="/users", tags=["users"])

PRIVILEGED_ROLES = ("admin", "super_admin")


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_users"))
):
    return [user_to_dict(u) for u in UserService.list_users(db)]


@router.get("/permission-categories")
async def permission_categories(current_user: User = Depends(require_permission("can_manage_users"))):
    """Permission matrix layout plus each role's template"""
    return {
        "categories": permission_service.PERMISSION_CATEGORIES,
        "roles": permission_service.ROLE_PERMISSIONS,
        "hierarchy": permission_service.ROLE_HIERARCHY,
        "critical": sorted(permission_service.CRITICAL_PERMISSIONS),
    }


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_users"))
):
    # Overrides and admin-level roles go through the same gate as PUT /{id}/role
    privileged = data.permissions or data.role in PRIVILEGED_ROLES
    if privileged and not permission_service.check_critical_permission(current_user, "can_manage_permissions"):
        raise HTTPException(status_code=403, detail="권한 설정은 최고 관리자만 가능합니다.")
    return user_to_dict(UserService.create_user(db, data))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_users"))
):
    user = UserService.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user_to_dict(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_users"))
):
    return user_to_dict(UserService.update_user(db, user_id, data))


@router.put("/{user_id}/permissions", response_model=UserResponse)
def set_permissions(
    user_id: int,
    data: PermissionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_critical_permission("can_manage_permissions"))
):
    return user_to_dict(UserService.set_permissions(db, user_id, data.permissions))


@router.post("/{user_id}/permissions/reset", response_model=UserResponse)
def reset_permissions(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_critical_permission("can_manage_permissions"))
):
    return user_to_dict(UserService.reset_permissions(db, user_id))


@router.put("/{user_id}/role", response_model=UserResponse)
def change_role(
    user_id: int,
    data: RoleChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_critical_permission("can_manage_permissions"))
):
    return user_to_dict(UserService.change_role(db, user_id, data.role))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("can_manage_users"))
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="자기 자신은 삭제할 수 없습니다.")
    if not UserService.delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
