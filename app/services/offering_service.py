"""
Offering service — search and CRUD for offerings.
Ownership checks live here; the HTTP layer only translates errors.
"""

import logging
from datetime import datetime, timezone

from app.domain.errors import NotOwnerError, OfferingNotFoundError
from app.domain.models import (
    Offering,
    OfferingCreate,
    OfferingDetail,
    OfferingPage,
    OfferingQuery,
    OfferingUpdate,
    RequestorSummary,
)
from app.ports.database_port import DatabasePort
from app.services import offering_query

logger = logging.getLogger(__name__)

# Fields a PUT may clear by sending null
_NULLABLE_FIELDS = {"description"}


class OfferingService:
    """Handles offering queries and owner-checked mutations."""

    def __init__(self, db: DatabasePort) -> None:
        self._db = db

    async def _snapshot(self) -> list[Offering]:
        rows = await self._db.list_offerings()
        return [Offering(**row) for row in rows]

    async def search(self, query: OfferingQuery) -> OfferingPage:
        """Filtered, sorted, paginated view over all offerings."""
        return offering_query.run_query(await self._snapshot(), query)

    async def search_all(self, query: OfferingQuery, cap: int) -> list[Offering]:
        """Unpaginated variant for clients that expect a bare array."""
        return offering_query.run_legacy_query(await self._snapshot(), query, cap)

    async def create(self, requestor_id: str, body: OfferingCreate) -> Offering:
        now = datetime.now(timezone.utc)
        data = {
            **body.model_dump(),
            "requestor_id": requestor_id,
            "applications_count": 0,
            "featured": False,
            "created_at": now,
            "updated_at": now,
        }
        row = await self._db.create_offering(data)
        logger.info("Offering %s created by %s", row["id"], requestor_id)
        return Offering(**row)

    async def get(self, offering_id: str) -> Offering:
        row = await self._db.get_offering(offering_id)
        if not row:
            raise OfferingNotFoundError(offering_id)
        return Offering(**row)

    async def get_details(self, offering_id: str) -> OfferingDetail:
        """Offering plus the public projection of the user who posted it."""
        offering = await self.get(offering_id)
        user = await self._db.get_user(offering.requestor_id)
        requestor = RequestorSummary(**user) if user else None
        return OfferingDetail(**offering.model_dump(), requestor=requestor)

    async def list_for_requestor(self, requestor_id: str) -> list[Offering]:
        """All offerings posted by one user, newest first."""
        rows = await self._db.list_offerings(requestor_id=requestor_id)
        offerings = [Offering(**row) for row in rows]
        return sorted(offerings, key=lambda o: o.created_at, reverse=True)

    async def _get_owned(self, offering_id: str, user_id: str) -> Offering:
        offering = await self.get(offering_id)
        if offering.requestor_id != user_id:
            logger.warning(
                "User %s tried to modify offering %s owned by %s",
                user_id, offering_id, offering.requestor_id,
            )
            raise NotOwnerError(offering_id, user_id)
        return offering

    async def update(
        self, offering_id: str, user_id: str, body: OfferingUpdate
    ) -> Offering:
        await self._get_owned(offering_id, user_id)
        changes = {
            key: value
            for key, value in body.model_dump(exclude_unset=True).items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        changes["updated_at"] = datetime.now(timezone.utc)
        row = await self._db.update_offering(offering_id, changes)
        if not row:
            raise OfferingNotFoundError(offering_id)
        return Offering(**row)

    async def delete(self, offering_id: str, user_id: str) -> None:
        await self._get_owned(offering_id, user_id)
        await self._db.delete_applications_for_offering(offering_id)
        if not await self._db.delete_offering(offering_id):
            raise OfferingNotFoundError(offering_id)
        logger.info("Offering %s deleted by %s", offering_id, user_id)

    async def set_featured(self, offering_id: str, featured: bool) -> Offering:
        """Administrative pin; no ownership check, the caller must be an admin."""
        await self.get(offering_id)
        row = await self._db.update_offering(
            offering_id,
            {"featured": featured, "updated_at": datetime.now(timezone.utc)},
        )
        if not row:
            raise OfferingNotFoundError(offering_id)
        return Offering(**row)
