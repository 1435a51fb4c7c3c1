"""
Hostaway source adapter.

Fetches raw guest reviews from the Hostaway API and parses them into
HostawayReview values. One attempt per call, no retries: when the API is
unreachable, answers with a non-2xx status, sends something that isn't JSON,
or has no reviews, the bundled static dataset is used instead.

Usage:
    client = HostawayClient()
    reviews = client.fetch_reviews()
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
from django.conf import settings

from reviewdesk.reviews.exceptions import HostawaySchemaError, HostawayUnavailable
from reviewdesk.reviews.serializers.hostaway import HostawayReviewSerializer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostawayReview:
    id: str
    type: str
    status: str
    submitted_at: datetime
    listing_name: str
    rating: Optional[float] = None
    public_review: Optional[str] = None
    # (category, rating) pairs in upstream order; None when the record has none
    review_category: Optional[Tuple[Tuple[str, float], ...]] = None
    guest_name: Optional[str] = None
    channel: Optional[str] = None


@dataclass(frozen=True)
class Parsed:
    review: HostawayReview
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Rejected:
    payload: Any
    errors: Dict[str, Any]
    ok: bool = field(default=False, init=False)


ParseResult = Union[Parsed, Rejected]


def parse_hostaway_review(payload: Any) -> ParseResult:
    """Validate one raw record against the Hostaway schema."""
    if not isinstance(payload, dict):
        return Rejected(payload=payload, errors={"non_field_errors": ["Expected an object."]})

    serializer = HostawayReviewSerializer(data=payload)
    if not serializer.is_valid():
        return Rejected(payload=payload, errors=serializer.errors)

    data = serializer.validated_data
    categories = data.get("reviewCategory")
    return Parsed(
        review=HostawayReview(
            id=data["id"],
            type=data["type"],
            status=data["status"],
            submitted_at=data["submittedAt"],
            listing_name=data["listingName"],
            rating=data.get("rating"),
            public_review=data.get("publicReview"),
            review_category=(
                tuple((c["category"], c["rating"]) for c in categories)
                if categories is not None else None
            ),
            guest_name=data.get("guestName"),
            channel=data.get("channel"),
        )
    )


def parse_hostaway_reviews(records: List[Any]) -> List[HostawayReview]:
    """
    Parse a batch; a single invalid record rejects the whole batch.

    Raises:
        HostawaySchemaError: with the index and field errors of every bad record
    """
    reviews, rejected = [], {}
    for index, payload in enumerate(records):
        result = parse_hostaway_review(payload)
        if result.ok:
            reviews.append(result.review)
        else:
            rejected[str(index)] = result.errors

    if rejected:
        logger.warning("rejected %d Hostaway record(s): %s", len(rejected), rejected)
        raise HostawaySchemaError({"records": rejected})
    return reviews


class HostawayClient:
    """
    Thin wrapper around the Hostaway reviews endpoint with a local fallback.

    Every argument defaults to the matching HOSTAWAY_* setting.
    """

    def __init__(
        self,
        base_url: str = None,
        account_id: str = None,
        api_key: str = None,
        timeout: float = None,
        mock_data_path: Union[str, Path] = None,
        offline: bool = False,
    ):
        self.base_url = (base_url or settings.HOSTAWAY_BASE_URL).rstrip("/")
        self.account_id = account_id or settings.HOSTAWAY_ACCOUNT_ID
        self.api_key = api_key if api_key is not None else settings.HOSTAWAY_API_KEY
        self.timeout = timeout or settings.HOSTAWAY_REQUEST_TIMEOUT
        self.mock_data_path = Path(mock_data_path or settings.HOSTAWAY_MOCK_DATA_PATH)
        # skip the API entirely and read the local dataset
        self.offline = offline

    @property
    def reviews_url(self) -> str:
        return f"{self.base_url}/v1/accounts/{self.account_id}/reviews"

    def fetch_reviews(self) -> List[HostawayReview]:
        """
        Live reviews, or the static dataset when the API can't deliver any.

        Raises:
            HostawaySchemaError: when a record (live or fallback) fails validation
        """
        if self.offline:
            return parse_hostaway_reviews(self.load_mock_records())

        try:
            records = self._request_reviews()
        except HostawayUnavailable as e:
            logger.warning("Hostaway unavailable (%s); using local dataset %s", e, self.mock_data_path)
            records = self.load_mock_records()
        else:
            logger.info("fetched %d review(s) from Hostaway", len(records))

        return parse_hostaway_reviews(records)

    def _request_reviews(self) -> List[Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.get(self.reviews_url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise HostawayUnavailable(f"request failed: {e}") from e

        if not response.ok:
            raise HostawayUnavailable(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise HostawayUnavailable("response body is not JSON") from e

        records = payload.get("result") if isinstance(payload, dict) else None
        if not records or not isinstance(records, list):
            raise HostawayUnavailable("empty result")
        return records

    def load_mock_records(self) -> List[Any]:
        """Raw records from the bundled dataset ({"result": [...]} or a bare list)."""
        with self.mock_data_path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            return payload.get("result") or []
        return payload
