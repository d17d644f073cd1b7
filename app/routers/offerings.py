"""
Offering endpoints — search, CRUD and applications.
All logic delegated to OfferingService and ApplicationService.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.config import settings
from app.dependencies import get_application_service, get_offering_service
from app.domain.enums import ResponseFormat
from app.domain.errors import DuplicateApplicationError, NotOwnerError, OfferingNotFoundError
from app.domain.models import (
    Applicant,
    ApplicationCreate,
    AppliedStatus,
    ApplyResponse,
    MessageResponse,
    Offering,
    OfferingCreate,
    OfferingDetail,
    OfferingPage,
    OfferingQuery,
    OfferingUpdate,
)
from app.services.application_service import ApplicationService
from app.services.auth_service import get_current_user
from app.services.offering_service import OfferingService

router = APIRouter(prefix="/api/offerings", tags=["Offerings"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Offering not found",
    )


@router.get("", response_model=OfferingPage | list[Offering])
async def list_offerings(
    request: Request,
    svc: OfferingService = Depends(get_offering_service),
):
    """
    Search, filter, sort and paginate offerings (public).

    Query parameters are advisory: anything malformed is ignored or
    replaced by its default, never rejected. ``format=array`` returns
    a bare list of every match instead of the paginated envelope.
    """
    query = OfferingQuery.from_params(request.query_params)
    if query.format is ResponseFormat.ARRAY:
        return await svc.search_all(query, cap=settings.legacy_list_limit)
    return await svc.search(query)


@router.post("", response_model=Offering, status_code=status.HTTP_201_CREATED)
async def create_offering(
    body: OfferingCreate,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: OfferingService = Depends(get_offering_service),
):
    """Post a new offering owned by the authenticated user."""
    return await svc.create(requestor_id=current_user["id"], body=body)


@router.get("/mine", response_model=list[Offering])
async def list_my_offerings(
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: OfferingService = Depends(get_offering_service),
):
    """Offerings posted by the authenticated user, newest first."""
    return await svc.list_for_requestor(current_user["id"])


@router.get("/{offering_id}", response_model=OfferingDetail)
async def get_offering(
    offering_id: str,
    svc: OfferingService = Depends(get_offering_service),
):
    """Single offering with its requestor's public profile."""
    try:
        return await svc.get_details(offering_id)
    except OfferingNotFoundError:
        raise _not_found()


@router.put("/{offering_id}", response_model=Offering)
async def update_offering(
    offering_id: str,
    body: OfferingUpdate,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: OfferingService = Depends(get_offering_service),
):
    """Update an offering. Only its requestor may do this."""
    try:
        return await svc.update(offering_id, current_user["id"], body)
    except OfferingNotFoundError:
        raise _not_found()
    except NotOwnerError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to update this offering",
        )


@router.delete("/{offering_id}", response_model=MessageResponse)
async def delete_offering(
    offering_id: str,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: OfferingService = Depends(get_offering_service),
):
    """Hard-delete an offering and its applications. Owner only."""
    try:
        await svc.delete(offering_id, current_user["id"])
    except OfferingNotFoundError:
        raise _not_found()
    except NotOwnerError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this offering",
        )
    return MessageResponse(message="Offering deleted successfully")


# ── Applications ──────────────────────────────────────────────


@router.post(
    "/{offering_id}/apply",
    response_model=ApplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_to_offering(
    offering_id: str,
    body: ApplicationCreate | None = None,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: ApplicationService = Depends(get_application_service),
):
    """Apply once to an offering; a second attempt is rejected."""
    message = body.message if body else None
    try:
        application = await svc.apply(offering_id, current_user["id"], message)
    except OfferingNotFoundError:
        raise _not_found()
    except DuplicateApplicationError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You have already applied to this offering",
        )
    return ApplyResponse(application=application)


@router.get("/{offering_id}/applied", response_model=AppliedStatus)
async def check_applied(
    offering_id: str,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: ApplicationService = Depends(get_application_service),
):
    """Whether the authenticated user has applied to this offering."""
    return await svc.get_status(offering_id, current_user["id"])


@router.get("/{offering_id}/applicants", response_model=list[Applicant])
async def list_applicants(
    offering_id: str,
    current_user: dict[str, Any] = Depends(get_current_user),
    svc: ApplicationService = Depends(get_application_service),
):
    """Applicants for an offering, with their public details. Owner only."""
    try:
        return await svc.list_applicants(offering_id, current_user["id"])
    except OfferingNotFoundError:
        raise _not_found()
    except NotOwnerError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to view applicants for this offering",
        )
