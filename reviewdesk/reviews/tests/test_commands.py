from io import StringIO
from unittest.mock import patch

import pytest
import requests
from django.core.management import call_command
from django.core.management.base import CommandError

from reviewdesk.reviews.factories import ReviewFactory
from reviewdesk.reviews.models import Listing, Review, ReviewSelectionLog


@pytest.mark.django_db
class TestSeedReviews:

    def test_seed_from_dataset(self):
        out = StringIO()
        call_command("seed_reviews", "--from-mock", stdout=out)

        assert Review.objects.count() == 12
        assert Listing.objects.count() == 4
        assert not Review.objects.filter(approved=True).exists()
        output = out.getvalue()
        assert "Seeded 4 listings and 12 reviews" in output
        assert "1. " in output and "3. " in output

    def test_approve_ratio_goes_through_audit_log(self):
        call_command("seed_reviews", "--from-mock", "--approve-ratio", "0.5", "--seed", "7", stdout=StringIO())

        assert Review.objects.filter(approved=True).count() == 6
        assert ReviewSelectionLog.objects.filter(action=ReviewSelectionLog.APPROVED).count() == 6

    def test_wipe(self):
        ReviewFactory.create_batch(3)
        call_command("seed_reviews", "--wipe", "--from-mock", stdout=StringIO())
        assert Review.objects.count() == 12

    def test_invalid_ratio(self):
        with pytest.raises(CommandError):
            call_command("seed_reviews", "--approve-ratio", "1.5", stdout=StringIO())


@pytest.mark.django_db
class TestSyncReviewsCommand:

    def test_sync_twice(self):
        out = StringIO()
        with patch("reviewdesk.reviews.services.hostaway.requests.get",
                   side_effect=requests.ConnectionError("offline")):
            call_command("sync_reviews", stdout=out)
            call_command("sync_reviews", stdout=out)

        assert "created=12, updated=0, unchanged=0" in out.getvalue()
        assert "created=0, updated=0, unchanged=12" in out.getvalue()
        assert Review.objects.count() == 12
