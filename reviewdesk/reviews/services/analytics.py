"""
Read-side aggregates over persisted reviews: top listings, per-category
averages, a bucketed trend series and low-scoring categories.
"""

import calendar
from collections import defaultdict
from datetime import timedelta
from numbers import Number

from django.db.models import Avg, Count, F
from django.db.models.functions import TruncDay, TruncMonth, TruncWeek
from django.utils import timezone

from reviewdesk.reviews.models import Listing, Review
from reviewdesk.reviews.services.filters import AnalyticsFilters, analytics_filter_q
from reviewdesk.reviews.utils import round_rating

TOP_LISTINGS_LIMIT = 5
ISSUE_THRESHOLD = 7.0

# bucket -> truncation applied to submitted_at
BUCKETS = {
    "day": TruncDay,
    "week": TruncWeek,
    "month": TruncMonth,
}


def _months_before(moment, months):
    """Same day-of-month `months` calendar months earlier (clamped to month end)."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def lookback_start(bucket, now):
    """Start of the trend window: 30 days, 12 weeks or 12 months before now."""
    if bucket == "day":
        return now - timedelta(days=30)
    if bucket == "week":
        return now - timedelta(weeks=12)
    return _months_before(now, 12)


def bucket_key(bucket, period):
    """yyyy-MM-dd, ISO yyyy-Www or yyyy-MM; all sort lexicographically."""
    if bucket == "day":
        return period.strftime("%Y-%m-%d")
    if bucket == "week":
        iso_year, iso_week, _ = period.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return period.strftime("%Y-%m")


def _filtered(filters):
    return Review.objects.filter(analytics_filter_q(filters))


def get_top_listings(filters, limit=TOP_LISTINGS_LIMIT):
    rows = (
        _filtered(filters)
        .values("listing_id", "listing__name")
        .annotate(count=Count("id"), avg_rating=Avg("rating_overall"))
        .order_by(F("avg_rating").desc(nulls_last=True), "listing__name")[:limit]
    )
    return [
        {
            "listingId": row["listing_id"],
            "name": row["listing__name"],
            "avgRating": round_rating(row["avg_rating"]),
            "count": row["count"],
        }
        for row in rows
    ]


def get_category_averages(filters):
    """Mean rating per category across every matching review's category map."""
    totals = defaultdict(lambda: [0.0, 0])
    for categories in _filtered(filters).order_by().values_list("categories", flat=True):
        if not isinstance(categories, dict):
            continue
        for category, rating in categories.items():
            if isinstance(rating, bool) or not isinstance(rating, Number):
                continue
            totals[category][0] += rating
            totals[category][1] += 1

    return {
        category: round_rating(total / count)
        for category, (total, count) in sorted(totals.items())
    }


def get_trend(filters, now=None):
    """
    Review count and mean rating per bucket inside the lookback window,
    further narrowed by the caller's listing and date range.
    """
    bucket = filters.bucket if filters.bucket in BUCKETS else "month"
    now = now or timezone.now()

    start = lookback_start(bucket, now)
    if filters.date_from is not None and filters.date_from > start:
        start = filters.date_from

    queryset = _filtered(AnalyticsFilters(listing_id=filters.listing_id, date_to=filters.date_to))
    rows = (
        queryset.filter(submitted_at__gte=start)
        .annotate(period=BUCKETS[bucket]("submitted_at"))
        .values("period")
        .annotate(count=Count("id"), avg_rating=Avg("rating_overall"))
        .order_by("period")
    )

    trend = [
        {
            "bucket": bucket_key(bucket, row["period"]),
            "avgRating": round_rating(row["avg_rating"]),
            "count": row["count"],
        }
        for row in rows
    ]
    trend.sort(key=lambda point: point["bucket"])
    return trend


def get_issues(category_averages, threshold=ISSUE_THRESHOLD):
    """
    Categories averaging below the threshold.

    `delta` (change against a prior period) is not computed yet and is
    always None.
    """
    return [
        {"category": category, "avg": avg, "delta": None}
        for category, avg in category_averages.items()
        if avg < threshold
    ]


def get_analytics(filters: AnalyticsFilters = None, now=None):
    filters = filters or AnalyticsFilters()
    category_averages = get_category_averages(filters)
    return {
        "topListings": get_top_listings(filters),
        "categoryAverages": category_averages,
        "trend": get_trend(filters, now=now),
        "issues": get_issues(category_averages),
    }


def get_listings_with_stats():
    """
    Listings that have at least one review, best average first.
    Listings without reviews are left out.
    """
    listings = (
        Listing.objects
        .annotate(review_count=Count("reviews"), avg_rating=Avg("reviews__rating_overall"))
        .filter(review_count__gt=0)
        .order_by(F("avg_rating").desc(nulls_last=True), "name")
    )
    return [
        {
            "id": listing.id,
            "name": listing.name,
            "avgRating": round_rating(listing.avg_rating),
            "reviewCount": listing.review_count,
        }
        for listing in listings
    ]
