from abc import ABC, abstractmethod
from typing import Any

class UserPort(ABC):
    @abstractmethod
    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        """Fetch a single user by ID."""
        ...

    @abstractmethod
    async def find_user_by_login(self, login: str) -> dict[str, Any] | None:
        """Fetch a user whose username or email equals ``login``."""
        ...

    @abstractmethod
    async def create_user(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a new user and return the created row.

        Raises UserExistsError if the username or email is taken.
        """
        ...

    @abstractmethod
    async def list_users(self) -> list[dict[str, Any]]:
        """All users, oldest first."""
        ...

    @abstractmethod
    async def create_completed_job(self, data: dict[str, Any]) -> dict[str, Any]:
        """Record a finished job and return the created row."""
        ...

    @abstractmethod
    async def list_completed_jobs(self, user_id: str) -> list[dict[str, Any]]:
        """Jobs completed by ``user_id``, most recent first."""
        ...
