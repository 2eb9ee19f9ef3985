from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from urbix.models.enums import UserRole
from urbix.models.user import User


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole
    created_at: datetime


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserOut


def to_user_out(user: User) -> UserOut:
    return UserOut(
        username=user.username,
        email=user.email,
        phone=user.phone,
        role=user.role,
        created_at=user.created_at,
    )
