"""Request authentication: resolves the bearer token to a validated user."""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from stockapi.core.security import decode_access_token
from stockapi.db.session import DbSession
from stockapi.models.user import User


class TokenData:
    """Decoded token data.

    Attributes:
        user_id: The user's database ID.
        email: The user's email address.
        name: The user's display name.
    """

    def __init__(self, user_id: int, email: str, name: str = ""):
        self.user_id = user_id
        self.email = email
        self.name = name or email.split("@")[0]


def _token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        return token or None
    return None


def get_current_user(request: Request, db: DbSession) -> TokenData:
    """Get the current authenticated user from the Authorization header.

    The token must be valid and its subject must still exist in the database.
    """
    token = _token_from_request(request)
    payload = decode_access_token(token) if token else None
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    user = db.get(User, user_id)
    if user is None or not user.is_verified:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account not found or not verified",
        )

    return TokenData(user_id=user.id, email=user.email, name=user.name)


CurrentUser = Annotated[TokenData, Depends(get_current_user)]
