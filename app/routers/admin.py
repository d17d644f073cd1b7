"""
Admin endpoints — presentation controls for offerings.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_offering_service
from app.domain.enums import UserRole
from app.domain.errors import OfferingNotFoundError
from app.domain.models import FeaturedUpdate, Offering
from app.services.auth_service import get_current_user
from app.services.offering_service import OfferingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.patch("/offerings/{offering_id}/featured", response_model=Offering)
async def set_offering_featured(
    offering_id: str,
    body: FeaturedUpdate,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: OfferingService = Depends(get_offering_service),
):
    """
    Pin or unpin an offering in the featured tier.
    Listings only honour the flag when called with ``featuredFirst=true``.
    """
    if current_user.get("role") != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can feature offerings",
        )

    try:
        offering = await svc.set_featured(offering_id, body.featured)
    except OfferingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offering not found",
        )

    logger.info(
        "Admin %s set featured=%s on offering %s",
        current_user["id"], body.featured, offering_id,
    )
    return offering
