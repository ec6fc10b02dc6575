"""Authentication service: registration, verification codes and JWT login.

No email is sent. The verification code is written to the log, and echoed in
the registration/resend message when running with ``DEBUG`` on so the flow can
be completed without a mail server.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockapi.core.config import settings
from stockapi.core.security import (
    create_access_token,
    generate_verification_code,
    get_password_hash,
    verify_password,
)
from stockapi.models.user import User
from stockapi.services.errors import (
    AuthenticationFailed,
    EmailAlreadyRegistered,
    NotFound,
    PersistenceFailure,
    VerificationFailed,
)

logger = logging.getLogger("auth")


def create_token_for(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id), "email": user.email, "name": user.name}
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AuthService:
    """User accounts and credentials."""

    def __init__(self, db: Session):
        self.db = db

    def _find_by_email(self, email: str) -> Optional[User]:
        return self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        ).scalar_one_or_none()

    def _new_code_expiry(self) -> datetime:
        return datetime.now(timezone.utc) + timedelta(hours=settings.verification_code_expire_hours)

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Error while trying to {action}")
            raise PersistenceFailure(f"Internal error while trying to {action}")

    def register(self, email: str, password: str, name: str) -> tuple[User, str]:
        """Create an unverified account. Returns the user and the code issued."""
        if self._find_by_email(email) is not None:
            raise EmailAlreadyRegistered("This email is already registered")

        code = generate_verification_code()
        user = User(
            email=email.strip().lower(),
            password_hash=get_password_hash(password),
            name=name.strip(),
            is_verified=False,
            verification_code=code,
            verification_code_expiry=self._new_code_expiry(),
        )
        self.db.add(user)
        self._commit("register the user")
        self.db.refresh(user)

        logger.info(f"New user registered: {user.email}, verification code: {code}")
        return user, code

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and return the user with a fresh access token."""
        user = self._find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for email: {email}")
            raise AuthenticationFailed("Invalid email or password")
        if not user.is_verified:
            logger.warning(f"Login attempt for unverified account: {user.email}")
            raise AuthenticationFailed("Account not verified. Please check your email.")

        logger.info(f"Successful login: {user.email} (ID: {user.id})")
        return user, create_token_for(user)

    def verify(self, email: str, code: str) -> tuple[User, str]:
        """Activate an account with its verification code."""
        user = self._find_by_email(email)
        if user is None:
            raise NotFound("User not found")
        if user.is_verified:
            raise VerificationFailed("This account is already verified")
        if user.verification_code != code:
            raise VerificationFailed("Invalid verification code")
        if (
            user.verification_code_expiry is None
            or _as_utc(user.verification_code_expiry) < datetime.now(timezone.utc)
        ):
            raise VerificationFailed("Verification code expired. Request a new code.")

        user.is_verified = True
        user.verification_code = None
        user.verification_code_expiry = None
        self._commit("verify the account")
        self.db.refresh(user)

        logger.info(f"Account verified: {user.email}")
        return user, create_token_for(user)

    def resend_code(self, email: str) -> str:
        """Issue a new verification code for an unverified account."""
        user = self._find_by_email(email)
        if user is None:
            raise NotFound("User not found")
        if user.is_verified:
            raise VerificationFailed("This account is already verified")

        code = generate_verification_code()
        user.verification_code = code
        user.verification_code_expiry = self._new_code_expiry()
        self._commit("resend the verification code")

        logger.info(f"New verification code issued for: {user.email}, code: {code}")
        return code

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user
