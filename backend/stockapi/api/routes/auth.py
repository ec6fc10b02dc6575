"""Authentication routes."""

import logging

from fastapi import APIRouter, Request

from stockapi.core.auth import CurrentUser
from stockapi.core.config import settings
from stockapi.core.rate_limit import limiter
from stockapi.db.session import DbSession
from stockapi.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    ResendCodeRequest,
    UserResponse,
    VerifyCodeRequest,
)
from stockapi.schemas.response import ApiResponse
from stockapi.services.auth_service import AuthService

logger = logging.getLogger("auth")

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
@limiter.limit("5/minute")
def register(request: Request, body: RegisterRequest, db: DbSession):
    """Create an account; it must be verified before logging in."""
    user, code = AuthService(db).register(body.email, body.password, body.name)
    message = "Registration successful. Check your email for the verification code."
    if settings.debug:
        message = f"Registration successful. Verification code: {code}"
    return AuthResponse(success=True, message=message, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
@limiter.limit("5/minute")
def login(request: Request, body: LoginRequest, db: DbSession):
    """Authenticate user and return JWT token."""
    user, token = AuthService(db).login(body.email, body.password)
    return AuthResponse(
        success=True,
        message="Login successful",
        access_token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/verify", response_model=AuthResponse)
@limiter.limit("10/minute")
def verify(request: Request, body: VerifyCodeRequest, db: DbSession):
    """Verify an account with its six-digit code and return a JWT token."""
    user, token = AuthService(db).verify(body.email, body.code)
    return AuthResponse(
        success=True,
        message="Account verified successfully",
        access_token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/resend-code", response_model=AuthResponse)
@limiter.limit("3/minute")
def resend_code(request: Request, body: ResendCodeRequest, db: DbSession):
    """Issue a new verification code."""
    code = AuthService(db).resend_code(body.email)
    message = "A new verification code was sent."
    if settings.debug:
        message = f"A new verification code was sent. Code: {code}"
    return AuthResponse(success=True, message=message)


@router.get("/profile", response_model=ApiResponse[UserResponse])
@limiter.limit("60/minute")
def profile(request: Request, current_user: CurrentUser, db: DbSession):
    """Get the authenticated user's profile."""
    user = AuthService(db).get_user(current_user.user_id)
    return ApiResponse[UserResponse].ok(UserResponse.model_validate(user))
