"""Accounts for admins, teachers and parents."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, EmailStr, Field


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    PARENT = "PARENT"


class User(Document):
    """User document; the role decides which dashboard and modules are available."""

    email: Indexed(EmailStr, unique=True)
    hashed_password: str
    role: UserRole
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
        use_state_management = True


class TeacherCreate(BaseModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None


class UserStatusUpdate(BaseModel):
    is_active: bool


class CredentialsUpdate(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: str
    email: str
    role: UserRole
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=str(user.id),
            email=user.email,
            role=user.role,
            name=user.name,
            phone=user.phone,
            address=user.address,
            is_active=user.is_active,
        )


class UserWithPassword(UserOut):
    """Returned once when the school generates or resets a password."""

    password: str
