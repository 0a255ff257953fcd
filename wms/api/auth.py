"""
Authentication API - Login, JWT Token, Permission Guards
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import Optional
from datetime import timedelta
import logging

from wms.core import get_db, settings
from wms.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from wms.models import User
from wms.services import UserService, permission_service
from wms.services.user_service import user_to_dict

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


# ============== Schemas ==============

class Token(BaseModel):
    access_token: str
    token_type: str
    user: dict


class PasswordChange(BaseModel):
    current_password: str
    new_password: str


# ============== Dependencies ==============

async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Get current user from JWT token"""
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload or payload.get("sub") is None:
        return None

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    return UserService.get_user(db, user_id)


async def get_current_active_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """Require authenticated user"""
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="로그인이 필요합니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


async def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Role admin or super_admin"""
    if current_user.role not in ("admin", "super_admin"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="관리자 권한이 필요합니다.")
    return current_user


def require_permission(key: str):
    """Dependency factory: resolved permission must be granted"""
    async def checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not permission_service.check_permission(current_user, key):
            logger.warning(f"Permission denied: {current_user.username} lacks {key}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"권한이 없습니다: {key}")
        return current_user
    return checker


def require_critical_permission(key: str):
    """Dependency factory: permission granted AND super_admin for critical keys"""
    async def checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not permission_service.check_critical_permission(current_user, key):
            logger.warning(f"Critical permission denied: {current_user.username} ({current_user.role}) for {key}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"최고 관리자 권한이 필요합니다: {key}")
        return current_user
    return checker


def require_any_permission(*keys: str):
    async def checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not any(permission_service.check_permission(current_user, key) for key in keys):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="권한이 없습니다.")
        return current_user
    return checker


# ============== API Endpoints ==============

@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Login with username and password, returns JWT token
    """
    user = UserService.authenticate(db, form_data.username, form_data.password)
    if not user:
        logger.warning(f"Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="아이디 또는 비밀번호가 올바르지 않습니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={"sub": str(user.id), "username": user.username, "role": user.role},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    logger.info(f"User logged in: {user.username}")
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user_to_dict(user),
    }


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Current user profile with resolved permissions"""
    return user_to_dict(current_user)


@router.post("/password")
def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Change password for current user"""
    if not verify_password(password_data.current_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="현재 비밀번호가 올바르지 않습니다."
        )
    current_user.hashed_password = get_password_hash(password_data.new_password)
    db.commit()
    return {"message": "비밀번호가 변경되었습니다."}
