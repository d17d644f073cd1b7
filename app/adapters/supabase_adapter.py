"""
Concrete implementation of DatabasePort using the Supabase Python client.

Tables and the ``increment_applications_count`` function are defined in
``schema.sql`` at the repository root.
"""

import logging
from datetime import datetime
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from app.domain.errors import DuplicateApplicationError, UserExistsError
from app.ports.database_port import DatabasePort

logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
_UNIQUE_VIOLATION = "23505"


def _serialize(data: dict[str, Any]) -> dict[str, Any]:
    """The REST client only accepts JSON-native values."""
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in data.items()
    }


class SupabaseAdapter(DatabasePort):
    """All database I/O goes through the Supabase REST client."""

    def __init__(self, client: Client) -> None:
        self._client = client

    # ── Users ─────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        result = (
            self._client.table("users")
            .select("*")
            .eq("id", user_id)
            .maybe_single()
            .execute()
        )
        return result.data if result else None

    async def find_user_by_login(self, login: str) -> dict[str, Any] | None:
        for column in ("username", "email"):
            result = (
                self._client.table("users")
                .select("*")
                .eq(column, login)
                .limit(1)
                .maybe_single()
                .execute()
            )
            if result and result.data:
                return result.data
        return None

    async def create_user(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            result = self._client.table("users").insert(_serialize(data)).execute()
        except APIError as exc:
            # Lost a race with a concurrent registration
            if exc.code == _UNIQUE_VIOLATION:
                raise UserExistsError("User already exists") from exc
            raise
        return result.data[0]

    async def list_users(self) -> list[dict[str, Any]]:
        result = (
            self._client.table("users")
            .select("*")
            .order("created_at")
            .execute()
        )
        return result.data or []

    # ── Completed jobs ────────────────────────────────────────

    async def create_completed_job(self, data: dict[str, Any]) -> dict[str, Any]:
        result = (
            self._client.table("completed_jobs")
            .insert(_serialize(data))
            .execute()
        )
        return result.data[0]

    async def list_completed_jobs(self, user_id: str) -> list[dict[str, Any]]:
        result = (
            self._client.table("completed_jobs")
            .select("*")
            .eq("completed_by", user_id)
            .order("completed_at", desc=True)
            .execute()
        )
        return result.data or []

    # ── Offerings ─────────────────────────────────────────────

    async def list_offerings(self, requestor_id: str | None = None) -> list[dict[str, Any]]:
        query = self._client.table("offerings").select("*")
        if requestor_id is not None:
            query = query.eq("requestor_id", requestor_id)
        result = query.order("created_at").execute()
        return result.data or []

    async def create_offering(self, data: dict[str, Any]) -> dict[str, Any]:
        result = self._client.table("offerings").insert(_serialize(data)).execute()
        return result.data[0]

    async def get_offering(self, offering_id: str) -> dict[str, Any] | None:
        result = (
            self._client.table("offerings")
            .select("*")
            .eq("id", offering_id)
            .maybe_single()
            .execute()
        )
        return result.data if result else None

    async def update_offering(
        self, offering_id: str, data: dict[str, Any]
    ) -> dict[str, Any] | None:
        result = (
            self._client.table("offerings")
            .update(_serialize(data))
            .eq("id", offering_id)
            .execute()
        )
        return result.data[0] if result.data else None

    async def delete_offering(self, offering_id: str) -> bool:
        result = (
            self._client.table("offerings")
            .delete()
            .eq("id", offering_id)
            .execute()
        )
        return bool(result.data)

    async def increment_applications(self, offering_id: str) -> None:
        # Server-side increment; a read-modify-write here could lose updates
        self._client.rpc(
            "increment_applications_count", {"p_offering_id": offering_id}
        ).execute()

    # ── Applications ──────────────────────────────────────────

    async def create_application(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            result = (
                self._client.table("applications")
                .insert(_serialize(data))
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateApplicationError(
                    data["offering_id"], data["applicant_id"]
                ) from exc
            raise
        return result.data[0]

    async def find_application(
        self, offering_id: str, applicant_id: str
    ) -> dict[str, Any] | None:
        result = (
            self._client.table("applications")
            .select("*")
            .eq("offering_id", offering_id)
            .eq("applicant_id", applicant_id)
            .limit(1)
            .maybe_single()
            .execute()
        )
        return result.data if result else None

    async def list_applications_for_offering(self, offering_id: str) -> list[dict[str, Any]]:
        result = (
            self._client.table("applications")
            .select("*")
            .eq("offering_id", offering_id)
            .order("created_at")
            .execute()
        )
        return result.data or []

    async def delete_applications_for_offering(self, offering_id: str) -> None:
        self._client.table("applications").delete().eq("offering_id", offering_id).execute()
        logger.info("Removed applications for deleted offering %s", offering_id)
