"""
User Domain Models

Accounts are owned by the auth subsystem; orders only reference them.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """
    User domain model

    password_hash is loaded only for credential checks and never serialized.
    """

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique email address")
    role: UserRole = Field(UserRole.USER, description="user or admin")
    password_hash: Optional[str] = Field(None, exclude=True, repr=False)
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
        }


class UserRegister(BaseModel):
    """Registration payload; presence and length are checked by the auth endpoint"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
