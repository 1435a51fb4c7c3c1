import logging
from dataclasses import dataclass

from reviewdesk.reviews.models import Review
from reviewdesk.reviews.services.hostaway import HostawayClient
from reviewdesk.reviews.services.normalizer import normalize_review

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"


@dataclass(frozen=True)
class SyncResult:
    created: int = 0
    updated: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated + self.unchanged


def upsert_review(normalized) -> str:
    """
    Insert or update one review keyed by (source, external_id).

    Only fields whose value differs are written; an identical record is left
    untouched. The approved flag is set on insert (False) and never updated here.
    """
    fields = normalized.to_model_fields()
    review, created = Review.objects.get_or_create(
        source=normalized.source,
        external_id=normalized.external_id,
        defaults={**fields, "approved": normalized.approved},
    )
    if created:
        return CREATED

    changed = [name for name, value in fields.items() if getattr(review, name) != value]
    if not changed:
        return UNCHANGED

    for name in changed:
        setattr(review, name, fields[name])
    review.save(update_fields=changed + ["updated_at"])
    return UPDATED


def sync_reviews(client: HostawayClient = None) -> SyncResult:
    """
    Pull reviews from Hostaway (or the fallback dataset) and upsert them.

    Records are committed one by one: a failure midway leaves earlier
    upserts in place.
    """
    client = client or HostawayClient()
    raw_reviews = client.fetch_reviews()

    counts = {CREATED: 0, UPDATED: 0, UNCHANGED: 0}
    for raw in raw_reviews:
        counts[upsert_review(normalize_review(raw))] += 1

    result = SyncResult(**counts)
    logger.info(
        "review sync done: created=%d updated=%d unchanged=%d",
        result.created, result.updated, result.unchanged,
    )
    return result
