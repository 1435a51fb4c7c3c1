import logging
from dataclasses import dataclass
from typing import List

from django.db import transaction

from reviewdesk.reviews.exceptions import ListingNotFound, ReviewNotFound
from reviewdesk.reviews.models import Listing, Review, ReviewSelectionLog
from reviewdesk.reviews.services.filters import ReviewFilters, review_filter_q

logger = logging.getLogger(__name__)

DEFAULT_ACTOR = "admin"


@dataclass(frozen=True)
class ReviewPage:
    items: List[Review]
    page: int
    page_size: int
    total: int


@dataclass(frozen=True)
class PublicReviews:
    listing: Listing
    items: List[Review]


def get_reviews(filters: ReviewFilters = None) -> ReviewPage:
    """
    One page of reviews matching the filters.

    `total` is counted over the whole filtered set, so it doesn't depend on
    page or page size. A page past the end is empty.
    """
    filters = filters or ReviewFilters()
    queryset = Review.objects.filter(review_filter_q(filters))

    total = queryset.count()
    items = list(
        queryset.select_related("listing")
        .order_by(*filters.ordering)[filters.offset:filters.offset + filters.page_size]
    )
    return ReviewPage(items=items, page=filters.page, page_size=filters.page_size, total=total)


def approve_review(review_id, approved: bool, actor: str = None) -> Review:
    """
    Set the approval flag and append an audit entry in one transaction.

    Every call is logged, including repeats with the same value.

    Raises:
        ReviewNotFound: no review with that id (nothing is written)
    """
    with transaction.atomic():
        try:
            review = Review.objects.select_for_update().get(pk=review_id)
        except (Review.DoesNotExist, ValueError, TypeError):
            raise ReviewNotFound()

        review.approved = approved
        review.save(update_fields=["approved", "updated_at"])
        ReviewSelectionLog.objects.create(
            review=review,
            action=ReviewSelectionLog.APPROVED if approved else ReviewSelectionLog.UNAPPROVED,
            actor=actor or "",
        )

    logger.info("review %s %s by %s", review.pk, "approved" if approved else "unapproved", actor or "unknown")
    return review


def _approved_reviews(listing: Listing) -> List[Review]:
    return list(
        Review.objects
        .filter(listing=listing, approved=True)
        .select_related("listing")
        .order_by("-submitted_at", "-id")
    )


def get_public_reviews(listing_id) -> PublicReviews:
    """
    Approved reviews of one listing, newest first, unpaginated.

    Raises:
        ListingNotFound: unknown listing id
    """
    try:
        listing = Listing.objects.get(pk=listing_id)
    except (Listing.DoesNotExist, ValueError, TypeError):
        raise ListingNotFound()
    return PublicReviews(listing=listing, items=_approved_reviews(listing))


def get_public_reviews_by_slug(slug: str) -> PublicReviews:
    """Same as get_public_reviews, resolving the listing by its slug."""
    try:
        listing = Listing.objects.get(slug=slug)
    except Listing.DoesNotExist:
        raise ListingNotFound()
    return PublicReviews(listing=listing, items=_approved_reviews(listing))
