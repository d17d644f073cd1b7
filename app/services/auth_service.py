"""
Authentication service.
Issues and decodes our own HS256 JWTs and resolves the current user.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.dependencies import get_db
from app.ports.database_port import DatabasePort

# auto_error=False so the cookie can be tried when the header is missing
_bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user: dict[str, Any]) -> str:
    """Sign a token whose ``sub`` claim is the user id."""
    expire = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expire_hours)
    payload = {
        "sub": str(user["id"]),
        "username": user["username"],
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _verify_token(token: str) -> str:
    """Decode a token and return the user_id (sub claim)."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=30,  # 30-second tolerance for clock drift
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {e}",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing user ID (sub claim)",
        )
    return user_id


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    db: DatabasePort = Depends(get_db),
) -> dict[str, Any]:
    """
    FastAPI dependency: take the token from the Authorization header,
    falling back to the httpOnly cookie, then load the user row.
    """
    token = credentials.credentials if credentials else None
    token = token or request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user_id = _verify_token(token)
    user = await db.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user
