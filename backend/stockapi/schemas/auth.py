"""Authentication and user schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Registration request body."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class VerifyCodeRequest(BaseModel):
    """Account verification request body."""

    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6, pattern=r"^\d{6}$")


class ResendCodeRequest(BaseModel):
    """Request a new verification code."""

    email: EmailStr


class UserResponse(BaseModel):
    """User response schema."""

    id: int
    email: str
    name: str
    is_verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Result of register, login and verification calls."""

    success: bool
    message: str = ""
    access_token: Optional[str] = None
    token_type: str = "bearer"
    user: Optional[UserResponse] = None
