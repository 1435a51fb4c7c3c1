import re
from datetime import datetime, time, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def slugify_listing_name(name: str) -> str:
    """
    URL-safe slug for a listing name.

    Lowercase, every run of non-alphanumeric characters collapsed into one "-",
    no leading/trailing separator. Idempotent: slugifying a slug returns it unchanged.
    """
    return _NON_ALNUM.sub("-", (name or "").lower()).strip("-")


def round_rating(value):
    """Round a rating to one decimal place; None stays None."""
    if value is None:
        return None
    return round(float(value), 1)


def mean_rating(values):
    """Unweighted mean of ratings rounded to one decimal, or None for no values."""
    values = [float(v) for v in values]
    if not values:
        return None
    return round_rating(sum(values) / len(values))


def parse_timestamp(value, end_of_day=False):
    """
    Parse an ISO-8601 datetime (or a bare YYYY-MM-DD date) into an aware datetime.

    A bare date maps to the start of that day, or to its last microsecond when
    end_of_day is set, so inclusive date-range bounds cover the whole day.
    Naive values are taken as UTC. Returns None when the value can't be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value or "").strip()
        if not text:
            return None
        try:
            # fromisoformat (3.11+) would read a bare date as midnight
            if _DATE_ONLY.match(text):
                day = parse_date(text)
                parsed = datetime.combine(day, time.max if end_of_day else time.min)
            else:
                parsed = parse_datetime(text)
        except ValueError:
            return None
        if parsed is None:
            return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed
