"""User schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from billgenie.core.rbac import UserRole
from billgenie.schemas.base import CamelModel


class UserBase(CamelModel):
    """Base user schema."""

    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None


class UserCreate(UserBase):
    """User creation schema."""

    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.WAITER
    active: bool = True


class UserUpdate(CamelModel):
    """User update schema. Passwords are not changed through this schema."""

    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[UserRole] = None
    active: Optional[bool] = None


class UserResponse(UserBase):
    """User response schema."""

    id: int
    email: str
    role: UserRole
    active: bool
    created_at: datetime
