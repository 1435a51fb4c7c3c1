from datetime import datetime, timezone as dt_timezone

import pytest
from rest_framework.test import APIClient

from reviewdesk.reviews.factories import ListingFactory, ReviewFactory


def ts(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.mark.django_db
class TestPublicReviews:

    def setup_method(self):
        self.client = APIClient()
        self.listing = ListingFactory(name="3B Islington - 52 Upper Street")
        self.older = ReviewFactory(
            listing=self.listing, approved=True, text="Spacious and quiet", submitted_at=ts(2025, 1, 12),
        )
        self.newer = ReviewFactory(
            listing=self.listing, approved=True, text="Flexible host", submitted_at=ts(2025, 3, 9),
        )
        self.hidden = ReviewFactory(
            listing=self.listing, approved=False, text="Kitchen missing basics", submitted_at=ts(2025, 2, 3),
        )
        # approved, but for another listing
        ReviewFactory(approved=True, text="Elsewhere")

    def test_only_approved_newest_first(self):
        r = self.client.get(f"/api/public-reviews/{self.listing.id}/")
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["listing"] == {"id": self.listing.id, "name": "3B Islington - 52 Upper Street"}
        assert [i["id"] for i in data["items"]] == [self.newer.id, self.older.id]
        assert all(i["approved"] for i in data["items"])

    def test_listing_without_approved_reviews(self):
        empty = ListingFactory(name="Studio S3 - 8 Hackney Road")
        ReviewFactory(listing=empty, approved=False)
        r = self.client.get(f"/api/public-reviews/{empty.id}/")
        assert r.status_code == 200
        assert r.json()["data"]["items"] == []

    def test_unknown_listing_is_404(self):
        r = self.client.get("/api/public-reviews/999999/")
        assert r.status_code == 404
        assert r.json()["status"] == "error"
        assert r.json()["error"] == "Listing not found"

    def test_unapproving_removes_from_feed(self):
        self.client.post(
            "/api/reviews/approve/", {"reviewId": self.newer.id, "approved": False}, format="json",
        )
        r = self.client.get(f"/api/public-reviews/{self.listing.id}/")
        assert [i["id"] for i in r.json()["data"]["items"]] == [self.older.id]


@pytest.mark.django_db
class TestPropertyPage:

    def setup_method(self):
        self.client = APIClient()
        self.listing = ListingFactory(name="2B N1 A - 29 Shoreditch Heights")
        ReviewFactory(listing=self.listing, approved=True, text="Great location and a spotless flat")
        ReviewFactory(listing=self.listing, approved=False, text="Shower was lukewarm")

    def test_renders_approved_reviews_only(self):
        r = self.client.get("/properties/2b-n1-a-29-shoreditch-heights/")
        assert r.status_code == 200
        html = r.content.decode()
        assert "2B N1 A - 29 Shoreditch Heights" in html
        assert "Great location and a spotless flat" in html
        assert "Shower was lukewarm" not in html

    def test_unknown_slug_is_404(self):
        assert self.client.get("/properties/no-such-place/").status_code == 404
