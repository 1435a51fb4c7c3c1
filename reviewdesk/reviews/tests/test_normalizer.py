import pytest

from reviewdesk.reviews.factories import HostawayPayloadFactory
from reviewdesk.reviews.models import Listing
from reviewdesk.reviews.services.hostaway import parse_hostaway_review
from reviewdesk.reviews.services.normalizer import (
    derive_overall_rating, flatten_categories, normalize_review,
)


def _raw(**overrides):
    result = parse_hostaway_review(HostawayPayloadFactory(**overrides))
    assert result.ok, result
    return result.review


def _categories(*pairs):
    return [{"category": c, "rating": r} for c, r in pairs]


class TestDeriveOverallRating:

    def test_explicit_rating_wins(self):
        assert derive_overall_rating(9.5, {"cleanliness": 4.0}) == 9.5

    def test_explicit_zero_counts(self):
        assert derive_overall_rating(0.0, {"cleanliness": 10.0}) == 0.0

    def test_mean_of_categories(self):
        assert derive_overall_rating(None, {"a": 7.0, "b": 8.0, "c": 8.0}) == 7.7

    def test_nothing_to_rate(self):
        assert derive_overall_rating(None, None) is None
        assert derive_overall_rating(None, {}) is None


def test_flatten_last_duplicate_wins():
    assert flatten_categories([("cleanliness", 6.0), ("value", 8.0), ("cleanliness", 9.0)]) == {
        "cleanliness": 9.0, "value": 8.0,
    }


@pytest.mark.django_db
class TestNormalizeReview:

    def test_maps_fields(self):
        raw = _raw(
            id="7453",
            type="host-to-guest",
            rating=None,
            reviewCategory=_categories(("cleanliness", 10), ("communication", 8), ("value", 9)),
            publicReview="Great guests",
            guestName="Shane Finkelstein",
            listingName="2B N1 A - 29 Shoreditch Heights",
            channel="airbnb",
        )
        review = normalize_review(raw)

        assert review.source == "hostaway"
        assert review.external_id == "7453"
        assert review.type == "host-to-guest"
        assert review.rating_overall == 9.0
        assert review.categories == {"cleanliness": 10.0, "communication": 8.0, "value": 9.0}
        assert review.text == "Great guests"
        assert review.author_name == "Shane Finkelstein"
        assert review.channel == "airbnb"
        assert review.approved is False
        assert review.listing.name == "2B N1 A - 29 Shoreditch Heights"

    def test_listing_created_once_per_name(self):
        first = normalize_review(_raw(listingName="Studio S3 - 8 Hackney Road"))
        second = normalize_review(_raw(listingName="Studio S3 - 8 Hackney Road"))

        assert first.listing.id == second.listing.id
        listing = Listing.objects.get()
        assert listing.slug == "studio-s3-8-hackney-road"
        assert listing.channel == "hostaway"

    def test_without_categories_or_rating(self):
        raw = _raw(rating=None, reviewCategory=None)
        review = normalize_review(raw)
        assert review.categories is None
        assert review.rating_overall is None
