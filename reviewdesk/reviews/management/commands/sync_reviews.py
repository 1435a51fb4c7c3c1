from django.core.management.base import BaseCommand

from reviewdesk.reviews.services.hostaway import HostawayClient
from reviewdesk.reviews.services.sync import sync_reviews


class Command(BaseCommand):
    help = "Pull reviews from Hostaway (falling back to the bundled dataset) and upsert them"

    def add_arguments(self, parser):
        parser.add_argument("--offline", action="store_true", help="Read the bundled dataset, skip the API.")

    def handle(self, *args, **opts):
        result = sync_reviews(HostawayClient(offline=opts["offline"]))
        self.stdout.write(
            self.style.SUCCESS(
                f"Synced {result.total} reviews: created={result.created}, "
                f"updated={result.updated}, unchanged={result.unchanged}"
            )
        )
