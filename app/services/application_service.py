"""
Application service — applying to offerings and reviewing applicants.
"""

import logging
from datetime import datetime, timezone

from app.domain.enums import ApplicationStatus
from app.domain.errors import DuplicateApplicationError, NotOwnerError, OfferingNotFoundError
from app.domain.models import (
    Applicant,
    ApplicantDetails,
    Application,
    AppliedStatus,
)
from app.ports.database_port import DatabasePort

logger = logging.getLogger(__name__)


class ApplicationService:
    """Creates applications and exposes them to offering owners."""

    def __init__(self, db: DatabasePort) -> None:
        self._db = db

    async def apply(
        self, offering_id: str, applicant_id: str, message: str | None = None
    ) -> Application:
        """
        Record one application and bump the offering's counter.

        The store rejects a second application for the same
        (offering, applicant) pair, so the counter is only incremented
        after a successful insert.
        """
        if not await self._db.get_offering(offering_id):
            raise OfferingNotFoundError(offering_id)

        try:
            row = await self._db.create_application(
                {
                    "offering_id": offering_id,
                    "applicant_id": applicant_id,
                    "message": message,
                    "status": ApplicationStatus.PENDING.value,
                    "created_at": datetime.now(timezone.utc),
                }
            )
        except DuplicateApplicationError:
            logger.warning("Duplicate application by %s to %s", applicant_id, offering_id)
            raise

        await self._db.increment_applications(offering_id)
        logger.info("User %s applied to offering %s", applicant_id, offering_id)
        return Application(**row)

    async def get_status(self, offering_id: str, applicant_id: str) -> AppliedStatus:
        row = await self._db.find_application(offering_id, applicant_id)
        return AppliedStatus(
            has_applied=row is not None,
            application=Application(**row) if row else None,
        )

    async def list_applicants(self, offering_id: str, owner_id: str) -> list[Applicant]:
        """Applications to an offering, visible to its owner only."""
        offering = await self._db.get_offering(offering_id)
        if not offering:
            raise OfferingNotFoundError(offering_id)
        if offering["requestor_id"] != owner_id:
            raise NotOwnerError(offering_id, owner_id)

        applicants = []
        for row in await self._db.list_applications_for_offering(offering_id):
            user = await self._db.get_user(row["applicant_id"])
            details = ApplicantDetails(**user) if user else None
            applicants.append(Applicant(**row, applicant_details=details))
        return applicants
