"""
Pydantic models for requests, responses, and internal data transfer.
Pure data — no I/O, no side effects.

Storage rows use snake_case keys; the JSON API speaks camelCase via
the alias generator on ``ApiModel``.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.domain.enums import (
    ApplicationStatus,
    ResponseFormat,
    SortField,
    SortOrder,
    UserRole,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ── Offering ──────────────────────────────────────────────────


class GeoPoint(ApiModel):
    """Plain decimal degrees."""

    lat: float
    lng: float


class OfferingCreate(ApiModel):
    """Request body for POST /api/offerings."""

    type: str = "job"
    label: str = Field(..., min_length=3, max_length=200)
    description: str | None = None
    location: GeoPoint
    payment_per_hour: float = Field(..., gt=0)
    max_hours: float = Field(..., gt=0)


class OfferingUpdate(ApiModel):
    """Request body for PUT /api/offerings/{id}. Only sent fields change."""

    type: str | None = None
    label: str | None = Field(None, min_length=3, max_length=200)
    description: str | None = None
    location: GeoPoint | None = None
    payment_per_hour: float | None = Field(None, gt=0)
    max_hours: float | None = Field(None, gt=0)


class Offering(ApiModel):
    """A posted task, as stored and as returned by the API."""

    id: str
    type: str = "job"
    label: str
    description: str | None = None
    location: GeoPoint
    payment_per_hour: float
    max_hours: float
    applications_count: int = 0
    requestor_id: str
    featured: bool = False
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _ensure_timezone(cls, value: datetime | None) -> datetime | None:
        # naive and aware datetimes must stay comparable when sorting by date
        return _as_utc(value)


class RequestorSummary(ApiModel):
    """Denormalized projection of the offering's owner."""

    id: str
    username: str
    rating: float = 0.0
    completed_jobs: int = 0


class OfferingDetail(Offering):
    """Response for GET /api/offerings/{id}."""

    requestor: RequestorSummary | None = None


class OfferingPage(ApiModel):
    """Paginated envelope for GET /api/offerings."""

    offerings: list[Offering]
    total: int
    page: int
    limit: int
    total_pages: int


class FeaturedUpdate(ApiModel):
    """Request body for PATCH /api/admin/offerings/{id}/featured."""

    featured: bool


class MessageResponse(ApiModel):
    message: str


# ── Offering query parameters ─────────────────────────────────


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class OfferingQuery(BaseModel):
    """
    Parameter bag for the offering search pipeline.

    Built from untrusted query-string input. Every field is optional and
    every validator degrades to "absent" or the default instead of
    raising, so constructing this model from request params never fails.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    search: str | None = Field(None, validation_alias=AliasChoices("search", "q"))
    type: str | None = None
    min_pay: float | None = Field(
        None, validation_alias=AliasChoices("minPay", "minPayment", "min_pay")
    )
    max_pay: float | None = Field(
        None, validation_alias=AliasChoices("maxPay", "maxPayment", "max_pay")
    )
    max_hours: float | None = Field(
        None, validation_alias=AliasChoices("maxHours", "max_hours")
    )
    has_applications: bool | None = Field(
        None, validation_alias=AliasChoices("hasApplications", "has_applications")
    )
    lat: float | None = None
    lng: float | None = None
    radius_km: float | None = Field(
        None, validation_alias=AliasChoices("radiusKm", "radius_km")
    )
    sort_by: SortField | None = Field(
        None, validation_alias=AliasChoices("sortBy", "sort_by")
    )
    sort_order: SortOrder | None = Field(
        None, validation_alias=AliasChoices("sortOrder", "sort_order")
    )
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    featured_first: bool = Field(
        False, validation_alias=AliasChoices("featuredFirst", "featured_first")
    )
    format: ResponseFormat = ResponseFormat.PAGE

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "OfferingQuery":
        """Build the parameter bag from a raw query-string mapping."""
        return cls.model_validate(dict(params))

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_params(cls, data: Any) -> Any:
        # A blank value counts as omitted, so it cannot shadow a filled alias
        if not isinstance(data, Mapping):
            return data
        return {
            key: value
            for key, value in data.items()
            if not (isinstance(value, str) and not value.strip())
        }

    @field_validator("search", "type", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _to_text(value)

    @field_validator("min_pay", "max_pay", "max_hours", "lat", "lng", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return _to_number(value)

    @field_validator("radius_km", mode="before")
    @classmethod
    def _coerce_radius(cls, value: Any) -> float | None:
        radius = _to_number(value)
        return radius if radius is not None and radius > 0 else None

    @field_validator("has_applications", mode="before")
    @classmethod
    def _coerce_tristate(cls, value: Any) -> bool | None:
        if isinstance(value, bool):
            return value
        return {"true": True, "false": False}.get(value) if isinstance(value, str) else None

    @field_validator("featured_first", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return value == "true"

    @field_validator("sort_by", mode="before")
    @classmethod
    def _coerce_sort_by(cls, value: Any) -> SortField | None:
        try:
            return SortField(value)
        except ValueError:
            return None

    @field_validator("sort_order", mode="before")
    @classmethod
    def _coerce_sort_order(cls, value: Any) -> SortOrder | None:
        try:
            return SortOrder(value)
        except ValueError:
            return None

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: Any) -> ResponseFormat:
        try:
            return ResponseFormat(value)
        except ValueError:
            return ResponseFormat.PAGE

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> int:
        number = _to_number(value)
        return int(number) if number is not None and number >= 1 else DEFAULT_PAGE

    @field_validator("limit", mode="before")
    @classmethod
    def _coerce_limit(cls, value: Any) -> int:
        number = _to_number(value)
        return int(number) if number is not None and number >= 1 else DEFAULT_LIMIT


# ── Application ───────────────────────────────────────────────


class ApplicationCreate(ApiModel):
    """Request body for POST /api/offerings/{id}/apply."""

    message: str | None = Field(None, max_length=2000)


class Application(ApiModel):
    id: str
    offering_id: str
    applicant_id: str
    message: str | None = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    created_at: datetime


class ApplyResponse(ApiModel):
    message: str = "Application submitted successfully"
    application: Application


class AppliedStatus(ApiModel):
    """Response for GET /api/offerings/{id}/applied."""

    has_applied: bool
    application: Application | None = None


class ApplicantDetails(ApiModel):
    username: str
    email: str
    rating: float = 0.0
    completed_jobs: int = 0
    created_at: datetime | None = None


class Applicant(Application):
    """An application joined with the applicant's public profile."""

    applicant_details: ApplicantDetails | None = None


# ── User / Auth ───────────────────────────────────────────────


class UserPublic(ApiModel):
    """Public profile, safe to list to anyone."""

    id: str
    username: str
    rating: float = 0.0
    completed_jobs: int = 0
    # offerings this user has posted; derived, not stored
    created_jobs: int = 0
    created_at: datetime | None = None


class UserProfile(UserPublic):
    """The authenticated user's own profile."""

    email: str
    role: UserRole = UserRole.USER


class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(ApiModel):
    """``username`` accepts either the username or the email."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(ApiModel):
    message: str
    user: UserProfile
    token: str


class ProfileResponse(ApiModel):
    user: UserProfile


class DemoCredentials(ApiModel):
    username: str
    password: str


class DemoUserResponse(ApiModel):
    """Response for POST /api/auth/demo-user."""

    message: str
    user: DemoCredentials


# ── Completed jobs ────────────────────────────────────────────


class CompletedForUser(ApiModel):
    """Who the work was done for."""

    username: str
    email: str


class CompletedJob(ApiModel):
    """A finished piece of work, credited to the user who did it."""

    id: str
    job_title: str
    description: str | None = None
    location: GeoPoint | None = None
    payment_per_hour: float
    hours_worked: float
    total_payment: float
    completed_by: str
    completed_for: str
    completed_at: datetime
    rating: float | None = None

    @field_validator("completed_at")
    @classmethod
    def _ensure_timezone(cls, value: datetime) -> datetime:
        return _as_utc(value)


class CompletedJobDetail(CompletedJob):
    """Response item for GET /api/users/{id}/completed-jobs."""

    completed_for_user: CompletedForUser | None = None
