from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase

from reviewdesk.reviews.factories import ListingFactory, ReviewFactory
from reviewdesk.reviews.models import Listing


class ReviewModelTests(TestCase):

    def test_rating_must_be_within_range(self):
        review = ReviewFactory.build(listing=ListingFactory(), rating_overall=10.5)
        with self.assertRaises(ValidationError):
            review.clean()

        review.rating_overall = 0
        review.clean()

    def test_external_id_unique_per_source(self):
        review = ReviewFactory(external_id="7453")
        with self.assertRaises(IntegrityError), transaction.atomic():
            ReviewFactory(external_id="7453", listing=review.listing)

        ReviewFactory(external_id="7453", source="google")

    def test_listing_slug_filled_on_save(self):
        listing = Listing.objects.create(name="Studio S3 - 8 Hackney Road")
        self.assertEqual(listing.slug, "studio-s3-8-hackney-road")
