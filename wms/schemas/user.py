"""
User Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Literal
from datetime import datetime

RoleName = Literal["super_admin", "admin", "manager", "user", "viewer"]

class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: RoleName = "viewer"
    department: Optional[str] = None
    position: Optional[str] = None
    is_manager: bool = False
    # Explicit overrides only; keys not given inherit the role default
    permissions: Dict[str, Optional[bool]] = {}

class UserUpdate(BaseModel):
    password: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    is_manager: Optional[bool] = None

class PermissionUpdate(BaseModel):
    permissions: Dict[str, Optional[bool]]

class RoleChange(BaseModel):
    role: RoleName

class UserResponse(BaseModel):
    id: int
    username: str
    role: str
    department: Optional[str]
    position: Optional[str]
    is_manager: Optional[bool]
    created_at: Optional[datetime] = None
    overrides: Dict[str, bool] = {}
    permissions: Dict[str, bool] = {}
