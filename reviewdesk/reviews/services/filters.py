from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from django.db.models import Q

# API sort name -> model field. Anything else is rejected.
SORT_FIELDS = {
    "submittedAt": "submitted_at",
    "ratingOverall": "rating_overall",
    "authorName": "author_name",
    "createdAt": "created_at",
    "status": "status",
    "channel": "channel",
    "type": "type",
}
SORT_DIRECTIONS = ("asc", "desc")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class ReviewFilters:
    """Validated filters for the review list. Every criterion is optional."""
    listing_id: Optional[int] = None
    type: Optional[str] = None
    status: Optional[str] = None
    channel: Optional[str] = None
    approved: Optional[bool] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    q: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort: Tuple[str, str] = field(default=("submitted_at", "desc"))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def ordering(self) -> Tuple[str, ...]:
        name, direction = self.sort
        primary = f"-{name}" if direction == "desc" else name
        # id as tie-breaker keeps pages stable
        return (primary, "-id" if direction == "desc" else "id")


@dataclass(frozen=True)
class AnalyticsFilters:
    listing_id: Optional[int] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    bucket: str = "month"


def date_range_q(date_from=None, date_to=None) -> Q:
    """Inclusive submission-date window."""
    q = Q()
    if date_from is not None:
        q &= Q(submitted_at__gte=date_from)
    if date_to is not None:
        q &= Q(submitted_at__lte=date_to)
    return q


def review_filter_q(filters: ReviewFilters) -> Q:
    """
    Build the review predicate from validated filters.

    All present criteria are AND'ed; the free-text search matches body OR author
    name (case-insensitive) and is AND'ed with the rest. Bounds are inclusive.
    """
    q = Q()
    if filters.listing_id is not None:
        q &= Q(listing_id=filters.listing_id)
    if filters.type:
        q &= Q(type=filters.type)
    if filters.status:
        q &= Q(status=filters.status)
    if filters.channel:
        q &= Q(channel=filters.channel)
    if filters.approved is not None:
        q &= Q(approved=filters.approved)
    if filters.min_rating is not None:
        q &= Q(rating_overall__gte=filters.min_rating)
    if filters.max_rating is not None:
        q &= Q(rating_overall__lte=filters.max_rating)
    q &= date_range_q(filters.date_from, filters.date_to)

    term = (filters.q or "").strip()
    if term:
        q &= Q(text__icontains=term) | Q(author_name__icontains=term)
    return q


def analytics_filter_q(filters: AnalyticsFilters) -> Q:
    q = Q()
    if filters.listing_id is not None:
        q &= Q(listing_id=filters.listing_id)
    return q & date_range_q(filters.date_from, filters.date_to)


def parse_sort(value: Optional[str]) -> Tuple[str, str]:
    """
    "field[:direction]" -> (model_field, direction).
    Raises ValueError for a field outside SORT_FIELDS or an unknown direction.
    """
    if not value:
        return ("submitted_at", "desc")
    name, _, direction = value.partition(":")
    name = name.strip()
    direction = (direction.strip() or "desc").lower()
    if name not in SORT_FIELDS:
        raise ValueError(f"Unsupported sort field '{name}'. Use one of: {', '.join(SORT_FIELDS)}.")
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unsupported sort direction '{direction}'. Use asc or desc.")
    return (SORT_FIELDS[name], direction)
