"""
Offering search pipeline: filter → sort → paginate.

Pure functions over an already-fetched snapshot of offerings. Nothing here
does I/O or mutates its input, and nothing here raises on bad parameters:
``OfferingQuery`` has already coerced every malformed value to "absent"
or to its default.
"""

import math
from typing import Callable, Iterable

from app.domain.enums import SortField, SortOrder
from app.domain.models import Offering, OfferingPage, OfferingQuery

# Flat-earth approximation: one degree of latitude is about 111 km.
# The box is square and also uses this factor for longitude.
KM_PER_DEGREE = 111.0

_SORT_KEYS: dict[SortField, Callable[[Offering], object]] = {
    SortField.DATE: lambda o: o.created_at,
    SortField.PAYMENT: lambda o: o.payment_per_hour,
    SortField.HOURS: lambda o: o.max_hours,
    SortField.APPLICATIONS: lambda o: o.applications_count,
}


# ── Predicates ────────────────────────────────────────────────


def _matches_text(offering: Offering, needle: str) -> bool:
    needle = needle.casefold()
    return (
        needle in offering.label.casefold()
        or needle in (offering.description or "").casefold()
    )


def _in_bounding_box(offering: Offering, lat: float, lng: float, radius_km: float) -> bool:
    delta = radius_km / KM_PER_DEGREE
    return (
        lat - delta <= offering.location.lat <= lat + delta
        and lng - delta <= offering.location.lng <= lng + delta
    )


def matches(offering: Offering, query: OfferingQuery) -> bool:
    """True when the offering satisfies every filter present in ``query``."""
    if query.search and not _matches_text(offering, query.search):
        return False
    if query.type is not None and offering.type != query.type:
        return False
    if query.min_pay is not None and offering.payment_per_hour < query.min_pay:
        return False
    if query.max_pay is not None and offering.payment_per_hour > query.max_pay:
        return False
    if query.max_hours is not None and offering.max_hours > query.max_hours:
        return False
    if query.has_applications is True and offering.applications_count <= 0:
        return False
    if query.has_applications is False and offering.applications_count != 0:
        return False
    if (
        query.lat is not None
        and query.lng is not None
        and query.radius_km is not None
        and not _in_bounding_box(offering, query.lat, query.lng, query.radius_km)
    ):
        return False
    return True


def filter_offerings(offerings: Iterable[Offering], query: OfferingQuery) -> list[Offering]:
    return [o for o in offerings if matches(o, query)]


# ── Ordering ──────────────────────────────────────────────────


def resolve_sort_order(query: OfferingQuery) -> SortOrder:
    """Newest-first for date listings, ascending for everything else."""
    if query.sort_order is not None:
        return query.sort_order
    return SortOrder.DESC if query.sort_by is SortField.DATE else SortOrder.ASC


def sort_offerings(offerings: list[Offering], query: OfferingQuery) -> list[Offering]:
    """
    Stable sort on the requested field.

    Without a recognised ``sort_by`` the storage order is kept. With
    ``featured_first`` the featured offerings are moved ahead of the rest,
    each group keeping its sorted order.
    """
    ordered = list(offerings)
    if query.sort_by is not None:
        # reverse=True keeps equal keys in their original relative order
        ordered = sorted(
            ordered,
            key=_SORT_KEYS[query.sort_by],
            reverse=resolve_sort_order(query) is SortOrder.DESC,
        )
    if query.featured_first:
        ordered = [o for o in ordered if o.featured] + [o for o in ordered if not o.featured]
    return ordered


# ── Pagination ────────────────────────────────────────────────


def paginate(offerings: list[Offering], page: int, limit: int) -> OfferingPage:
    """Slice one 1-based page; pages past the end are empty."""
    total = len(offerings)
    start = (page - 1) * limit
    return OfferingPage(
        offerings=offerings[start:start + limit],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


def run_query(offerings: Iterable[Offering], query: OfferingQuery) -> OfferingPage:
    """Full pipeline for the paginated listing."""
    matched = sort_offerings(filter_offerings(offerings, query), query)
    return paginate(matched, query.page, query.limit)


def run_legacy_query(
    offerings: Iterable[Offering], query: OfferingQuery, cap: int
) -> list[Offering]:
    """
    Every matching offering as one list, no pagination, at most ``cap`` items.
    Older clients expect newest first, so date order applies when no sort is given.
    """
    if query.sort_by is None:
        query = query.model_copy(update={"sort_by": SortField.DATE})
    return sort_offerings(filter_offerings(offerings, query), query)[:cap]
