"""
User service — registration, credential checks and public profiles.
Depends on ports only (Dependency Inversion).
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any

import bcrypt

from app.config import settings
from app.domain.enums import UserRole
from app.domain.errors import InvalidCredentialsError, UserExistsError
from app.domain.models import (
    CompletedForUser,
    CompletedJobDetail,
    RegisterRequest,
    UserProfile,
    UserPublic,
)
from app.ports.database_port import DatabasePort

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode()[:_BCRYPT_MAX_BYTES], salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(
        password.encode()[:_BCRYPT_MAX_BYTES], password_hash.encode()
    )


class UserService:
    """Orchestrates user-related business logic."""

    def __init__(self, db: DatabasePort) -> None:
        self._db = db

    async def register(self, body: RegisterRequest) -> dict[str, Any]:
        """Create a user with a bcrypt-hashed password. Username and email are unique."""
        for login in (body.username, body.email):
            if await self._db.find_user_by_login(login):
                raise UserExistsError("User already exists")

        user = await self._db.create_user(
            {
                "username": body.username,
                "email": body.email,
                "password_hash": hash_password(body.password),
                "role": UserRole.USER.value,
                "rating": 0.0,
                "completed_jobs": 0,
                "created_at": datetime.now(timezone.utc),
            }
        )
        logger.info("User registered: %s", user["id"])
        return user

    async def authenticate(self, login: str, password: str) -> dict[str, Any]:
        """Resolve a username-or-email plus password to the user row."""
        user = await self._db.find_user_by_login(login)
        password_hash = user.get("password_hash") if user else None
        if not password_hash or not verify_password(password, password_hash):
            raise InvalidCredentialsError("Invalid credentials")
        return user

    async def _created_jobs(self, user_id: str) -> int:
        return len(await self._db.list_offerings(requestor_id=user_id))

    async def to_profile(self, user: dict[str, Any]) -> UserProfile:
        """The owner's view of a user row, with its posted-offerings count."""
        return UserProfile(**user, created_jobs=await self._created_jobs(user["id"]))

    async def list_public(self) -> list[UserPublic]:
        # One pass over offerings instead of a count query per user
        created = Counter(o["requestor_id"] for o in await self._db.list_offerings())
        return [
            UserPublic(**u, created_jobs=created[u["id"]])
            for u in await self._db.list_users()
        ]

    async def get_public(self, user_id: str) -> UserPublic | None:
        user = await self._db.get_user(user_id)
        if not user:
            return None
        return UserPublic(**user, created_jobs=await self._created_jobs(user_id))

    async def list_completed_jobs(self, user_id: str) -> list[CompletedJobDetail] | None:
        """
        Jobs the user has completed, most recent first, each with the
        username and email of the person the work was done for.
        Returns None when the user does not exist.
        """
        if not await self._db.get_user(user_id):
            return None

        jobs = []
        for row in await self._db.list_completed_jobs(user_id):
            client = await self._db.get_user(row["completed_for"])
            completed_for = CompletedForUser(**client) if client else None
            jobs.append(CompletedJobDetail(**row, completed_for_user=completed_for))
        return jobs
