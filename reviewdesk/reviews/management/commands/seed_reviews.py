import random

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from reviewdesk.reviews.models import Listing, Review, ReviewSelectionLog
from reviewdesk.reviews.services.hostaway import HostawayClient
from reviewdesk.reviews.services.reviews import DEFAULT_ACTOR, approve_review
from reviewdesk.reviews.services.sync import sync_reviews


class Command(BaseCommand):
    """
    Reseed the review store:
    - optionally wipe selection logs, reviews and listings
    - sync from Hostaway (or straight from the bundled dataset with --from-mock)
    - optionally approve a random share of the reviews, audited like any approval
    - print counts and three sample reviews
    """

    help = "Seed the DB with Hostaway reviews (live API with fallback, or the bundled dataset)."

    def add_arguments(self, parser):
        parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
        parser.add_argument("--wipe", action="store_true", help="Delete ALL listings/reviews/logs before seeding.")
        parser.add_argument("--from-mock", action="store_true", help="Use the bundled dataset, skip the API.")
        parser.add_argument(
            "--approve-ratio", type=float, default=0.0,
            help="Share of reviews (0-1) to approve after syncing.",
        )

    @transaction.atomic
    def handle(self, *args, **opts):
        ratio = opts["approve_ratio"]
        if not 0 <= ratio <= 1:
            raise CommandError("--approve-ratio must be between 0 and 1.")

        seed = opts.get("seed")
        if seed is not None:
            random.seed(seed)

        if opts["wipe"]:
            self.stdout.write(self.style.WARNING("Wiping ALL listings/reviews/selection logs..."))
            ReviewSelectionLog.objects.all().delete()
            Review.objects.all().delete()
            Listing.objects.all().delete()

        result = sync_reviews(HostawayClient(offline=opts["from_mock"]))
        self.stdout.write(
            self.style.SUCCESS(
                f"Sync: created={result.created}, updated={result.updated}, unchanged={result.unchanged}"
            )
        )

        approved = 0
        if ratio:
            review_ids = list(Review.objects.order_by("id").values_list("id", flat=True))
            for review_id in random.sample(review_ids, k=round(len(review_ids) * ratio)):
                approve_review(review_id, True, actor=DEFAULT_ACTOR)
                approved += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {Listing.objects.count()} listings and {Review.objects.count()} reviews "
                f"({approved} approved)."
            )
        )

        self.stdout.write("Sample reviews:")
        samples = Review.objects.select_related("listing").order_by("-created_at", "-id")[:3]
        for i, review in enumerate(samples, start=1):
            self.stdout.write(
                f"{i}. {review.listing.name} - {review.author_name} ({review.rating_overall}/10)"
            )
