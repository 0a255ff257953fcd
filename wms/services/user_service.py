"""
User Service - accounts, roles and permission overrides
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
import logging

from wms.core import settings, InvalidInput, NotFound, Forbidden
from wms.core.security import get_password_hash, verify_password
from wms.models import User
from wms.schemas.user import UserCreate, UserUpdate
from . import permission_service

logger = logging.getLogger(__name__)

PROTECTED_USERNAME = "admin"

DEFAULT_USERS = [
    {"username": "admin", "role": "super_admin", "department": "관리부", "position": "절대관리자", "is_manager": True},
    {"username": "viewer", "role": "viewer", "department": "창고부", "position": "사원", "is_manager": False},
]


def user_to_dict(user: User) -> Dict[str, Any]:
    """Profile plus explicit overrides and resolved permissions"""
    return {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "department": user.department,
        "position": user.position,
        "is_manager": user.is_manager,
        "created_at": user.created_at,
        "overrides": permission_service.explicit_overrides(user),
        "permissions": permission_service.resolve_permissions(user),
    }


class UserService:

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def list_users(db: Session) -> List[User]:
        return db.query(User).order_by(User.id).all()

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> Optional[User]:
        user = UserService.get_by_username(db, username)
        if not user or not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    def create_user(db: Session, data: UserCreate) -> User:
        """New account; only the overrides given are stored, the rest inherit the role"""
        if UserService.get_by_username(db, data.username):
            raise InvalidInput(f"Username already exists: {data.username}")
        permission_service.validate_permission_keys(list(data.permissions.keys()))

        user = User(
            username=data.username,
            hashed_password=get_password_hash(data.password),
            role=data.role,
            department=data.department,
            position=data.position,
            is_manager=data.is_manager
        )
        permission_service.apply_overrides(user, data.permissions)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created user {user.username} ({user.role})")
        return user

    @staticmethod
    def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
        user = UserService.get_user(db, user_id)
        if not user:
            raise NotFound("User not found")
        updates = data.model_dump(exclude_unset=True)
        password = updates.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)
        for field, value in updates.items():
            setattr(user, field, value)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def set_permissions(db: Session, user_id: int, overrides: Dict[str, Optional[bool]]) -> User:
        user = UserService.get_user(db, user_id)
        if not user:
            raise NotFound("User not found")
        permission_service.apply_overrides(user, overrides)
        db.commit()
        db.refresh(user)
        logger.info(f"Permission overrides updated for {user.username}: {overrides}")
        return user

    @staticmethod
    def reset_permissions(db: Session, user_id: int) -> User:
        user = UserService.get_user(db, user_id)
        if not user:
            raise NotFound("User not found")
        permission_service.reset_user_permissions(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def change_role(db: Session, user_id: int, role: str) -> User:
        user = UserService.get_user(db, user_id)
        if not user:
            raise NotFound("User not found")
        permission_service.change_user_role(user, role)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int) -> bool:
        user = UserService.get_user(db, user_id)
        if not user:
            return False
        if user.username == PROTECTED_USERNAME or user.role == "super_admin":
            raise Forbidden("관리자 계정은 삭제할 수 없습니다")
        db.delete(user)
        db.commit()
        logger.info(f"Deleted user {user.username}")
        return True

    @staticmethod
    def seed_default_users(db: Session) -> int:
        """Create the admin and viewer accounts when missing"""
        passwords = {
            "admin": settings.DEFAULT_ADMIN_PASSWORD,
            "viewer": settings.DEFAULT_VIEWER_PASSWORD,
        }
        created = 0
        for account in DEFAULT_USERS:
            if UserService.get_by_username(db, account["username"]):
                continue
            db.add(User(hashed_password=get_password_hash(passwords[account["username"]]), **account))
            created += 1
        if created:
            db.commit()
            logger.info(f"Seeded {created} default user(s)")
        return created
