"""
In-process implementation of DatabasePort.

Backs local development (STORAGE_BACKEND=memory) and the test suite.
Rows live in insertion-ordered dicts, so ``list_*`` returns creation order
just like the ``created_at`` ordering of the Supabase adapter. Every method
runs without awaiting, so each call is atomic on the event loop.
"""

import copy
import uuid
from datetime import datetime, timezone
from typing import Any

from app.domain.errors import DuplicateApplicationError, UserExistsError
from app.ports.database_port import DatabasePort


def _new_row(data: dict[str, Any]) -> dict[str, Any]:
    # Mirror the column defaults the hosted tables apply on insert
    row = copy.deepcopy(data)
    row.setdefault("id", uuid.uuid4().hex)
    row.setdefault("created_at", datetime.now(timezone.utc))
    return row


class InMemoryAdapter(DatabasePort):
    """All data lives in this process and disappears with it."""

    def __init__(self) -> None:
        self._users: dict[str, dict[str, Any]] = {}
        self._offerings: dict[str, dict[str, Any]] = {}
        self._applications: dict[str, dict[str, Any]] = {}
        self._completed_jobs: dict[str, dict[str, Any]] = {}

    # ── Users ─────────────────────────────────────────────────

    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def find_user_by_login(self, login: str) -> dict[str, Any] | None:
        for user in self._users.values():
            if user.get("username") == login or user.get("email") == login:
                return copy.deepcopy(user)
        return None

    async def create_user(self, data: dict[str, Any]) -> dict[str, Any]:
        # Same unique constraints as the users table
        taken = {data.get("username"), data.get("email")} - {None}
        for user in self._users.values():
            if taken & {user.get("username"), user.get("email")}:
                raise UserExistsError("User already exists")
        row = _new_row(data)
        self._users[row["id"]] = row
        return copy.deepcopy(row)

    async def list_users(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(u) for u in self._users.values()]

    # ── Completed jobs ────────────────────────────────────────

    async def create_completed_job(self, data: dict[str, Any]) -> dict[str, Any]:
        row = _new_row(data)
        self._completed_jobs[row["id"]] = row
        return copy.deepcopy(row)

    async def list_completed_jobs(self, user_id: str) -> list[dict[str, Any]]:
        rows = [
            copy.deepcopy(job)
            for job in self._completed_jobs.values()
            if job.get("completed_by") == user_id
        ]
        return sorted(rows, key=lambda job: job["completed_at"], reverse=True)

    # ── Offerings ─────────────────────────────────────────────

    async def list_offerings(self, requestor_id: str | None = None) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(o)
            for o in self._offerings.values()
            if requestor_id is None or o.get("requestor_id") == requestor_id
        ]

    async def create_offering(self, data: dict[str, Any]) -> dict[str, Any]:
        row = _new_row(data)
        self._offerings[row["id"]] = row
        return copy.deepcopy(row)

    async def get_offering(self, offering_id: str) -> dict[str, Any] | None:
        offering = self._offerings.get(offering_id)
        return copy.deepcopy(offering) if offering else None

    async def update_offering(
        self, offering_id: str, data: dict[str, Any]
    ) -> dict[str, Any] | None:
        offering = self._offerings.get(offering_id)
        if offering is None:
            return None
        offering.update(copy.deepcopy(data))
        return copy.deepcopy(offering)

    async def delete_offering(self, offering_id: str) -> bool:
        return self._offerings.pop(offering_id, None) is not None

    async def increment_applications(self, offering_id: str) -> None:
        offering = self._offerings.get(offering_id)
        if offering is not None:
            offering["applications_count"] = offering.get("applications_count", 0) + 1

    # ── Applications ──────────────────────────────────────────

    async def create_application(self, data: dict[str, Any]) -> dict[str, Any]:
        offering_id, applicant_id = data["offering_id"], data["applicant_id"]
        for existing in self._applications.values():
            if (
                existing["offering_id"] == offering_id
                and existing["applicant_id"] == applicant_id
            ):
                raise DuplicateApplicationError(offering_id, applicant_id)
        row = _new_row(data)
        self._applications[row["id"]] = row
        return copy.deepcopy(row)

    async def find_application(
        self, offering_id: str, applicant_id: str
    ) -> dict[str, Any] | None:
        for application in self._applications.values():
            if (
                application["offering_id"] == offering_id
                and application["applicant_id"] == applicant_id
            ):
                return copy.deepcopy(application)
        return None

    async def list_applications_for_offering(self, offering_id: str) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(a)
            for a in self._applications.values()
            if a["offering_id"] == offering_id
        ]

    async def delete_applications_for_offering(self, offering_id: str) -> None:
        self._applications = {
            app_id: a
            for app_id, a in self._applications.items()
            if a["offering_id"] != offering_id
        }
