from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from reviewdesk.reviews.models import Listing, Review
from reviewdesk.reviews.services.hostaway import HostawayReview
from reviewdesk.reviews.utils import mean_rating, slugify_listing_name

HOSTAWAY_CHANNEL = "hostaway"


@dataclass(frozen=True)
class ListingRef:
    id: int
    name: str


@dataclass(frozen=True)
class NormalizedReview:
    """Canonical review shape, independent of the source system."""
    source: str
    external_id: Optional[str]
    listing: ListingRef
    type: str
    status: str
    rating_overall: Optional[float]
    categories: Optional[Dict[str, float]]
    text: Optional[str]
    author_name: Optional[str]
    channel: Optional[str]
    submitted_at: datetime
    # New reviews are never approved; approval is a separate, explicit step
    approved: bool = False
    id: Optional[int] = None

    def to_model_fields(self) -> dict:
        """Mutable fields written on upsert (approval state is not one of them)."""
        return {
            "listing_id": self.listing.id,
            "type": self.type,
            "status": self.status,
            "rating_overall": self.rating_overall,
            "categories": self.categories,
            "text": self.text or "",
            "author_name": self.author_name or "",
            "channel": self.channel or "",
            "submitted_at": self.submitted_at,
        }


def find_or_create_listing(name: str) -> Listing:
    """Resolve a listing by the slug of its name, creating it on first sight."""
    slug = slugify_listing_name(name)
    listing, _ = Listing.objects.get_or_create(
        slug=slug,
        defaults={"name": name, "channel": HOSTAWAY_CHANNEL},
    )
    return listing


def flatten_categories(pairs) -> Optional[Dict[str, float]]:
    """[(category, rating), ...] -> {category: rating}; later duplicates win."""
    if pairs is None:
        return None
    return {category: rating for category, rating in pairs}


def derive_overall_rating(rating, categories) -> Optional[float]:
    """
    The explicit rating when present, else the mean of the category ratings
    rounded to one decimal, else None.
    """
    if rating is not None:
        return rating
    if categories:
        return mean_rating(categories.values())
    return None


def normalize_review(raw: HostawayReview) -> NormalizedReview:
    """Map a Hostaway record to the canonical shape; resolves or creates its listing."""
    listing = find_or_create_listing(raw.listing_name)
    categories = flatten_categories(raw.review_category)

    return NormalizedReview(
        source=Review.Source.HOSTAWAY.value,
        external_id=raw.id,
        listing=ListingRef(id=listing.id, name=listing.name),
        type=raw.type,
        status=raw.status,
        rating_overall=derive_overall_rating(raw.rating, categories),
        categories=categories,
        text=raw.public_review,
        author_name=raw.guest_name,
        channel=raw.channel,
        submitted_at=raw.submitted_at,
        approved=False,
    )
