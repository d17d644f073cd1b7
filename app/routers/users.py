"""
User endpoints — public profiles and work history.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_user_service
from app.domain.models import CompletedJobDetail, UserPublic
from app.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=list[UserPublic])
async def list_users(svc: UserService = Depends(get_user_service)):
    return await svc.list_public()


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: str,
    svc: UserService = Depends(get_user_service),
):
    user = await svc.get_public(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


@router.get("/{user_id}/completed-jobs", response_model=list[CompletedJobDetail])
async def list_completed_jobs(
    user_id: str,
    svc: UserService = Depends(get_user_service),
):
    """Work history: jobs this user completed, most recent first."""
    jobs = await svc.list_completed_jobs(user_id)
    if jobs is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return jobs
