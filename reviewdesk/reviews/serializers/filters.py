from rest_framework import serializers

from reviewdesk.reviews.models import Review
from reviewdesk.reviews.services.filters import (
    DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, AnalyticsFilters, ReviewFilters, parse_sort,
)
from reviewdesk.reviews.utils import parse_timestamp

BUCKET_CHOICES = ("day", "week", "month")
# largest primary key a 64-bit integer column holds
MAX_ID = 2 ** 63 - 1


class DateRangeMixin:
    """
    Adds `from` / `to` query params (reserved words in Python, hence renamed in
    get_fields). Accepts YYYY-MM-DD or full ISO datetimes; a bare `to` date
    covers the whole day.
    """

    def get_fields(self):
        fields = super().get_fields()
        fields["from"] = serializers.CharField(required=False, allow_blank=True)
        fields["to"] = serializers.CharField(required=False, allow_blank=True)
        return fields

    def validate_date_range(self, attrs):
        errors = {}
        bounds = {}
        for key, end_of_day in (("from", False), ("to", True)):
            raw = attrs.get(key)
            if not raw:
                bounds[key] = None
                continue
            parsed = parse_timestamp(raw, end_of_day=end_of_day)
            if parsed is None:
                errors[key] = "Expected YYYY-MM-DD or an ISO-8601 datetime."
            bounds[key] = parsed
        if errors:
            raise serializers.ValidationError(errors)
        if bounds["from"] and bounds["to"] and bounds["from"] > bounds["to"]:
            raise serializers.ValidationError({"from": "'from' must not be after 'to'."})
        return bounds["from"], bounds["to"]


class ReviewFiltersSerializer(DateRangeMixin, serializers.Serializer):
    """Query-string filters for the review list. Pass a plain dict, not a QueryDict."""
    listingId = serializers.IntegerField(required=False, min_value=1, max_value=MAX_ID)
    type = serializers.ChoiceField(choices=Review.Type.choices, required=False)
    status = serializers.ChoiceField(choices=Review.Status.choices, required=False)
    channel = serializers.CharField(required=False, allow_blank=True)
    approved = serializers.BooleanField(required=False)
    minRating = serializers.FloatField(required=False, min_value=0, max_value=10)
    maxRating = serializers.FloatField(required=False, min_value=0, max_value=10)
    q = serializers.CharField(required=False, allow_blank=True, max_length=200)
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    pageSize = serializers.IntegerField(
        required=False, min_value=1, max_value=MAX_PAGE_SIZE, default=DEFAULT_PAGE_SIZE
    )
    sort = serializers.CharField(required=False, allow_blank=True)

    def validate_sort(self, value):
        try:
            return parse_sort(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

    def validate(self, attrs):
        lo, hi = attrs.get("minRating"), attrs.get("maxRating")
        if lo is not None and hi is not None and lo > hi:
            raise serializers.ValidationError({"minRating": "minRating must not exceed maxRating."})
        attrs["from"], attrs["to"] = self.validate_date_range(attrs)
        return attrs

    def to_filters(self) -> ReviewFilters:
        data = self.validated_data
        return ReviewFilters(
            listing_id=data.get("listingId"),
            type=data.get("type") or None,
            status=data.get("status") or None,
            channel=data.get("channel") or None,
            approved=data.get("approved"),
            min_rating=data.get("minRating"),
            max_rating=data.get("maxRating"),
            date_from=data.get("from"),
            date_to=data.get("to"),
            q=data.get("q") or None,
            page=data.get("page", 1),
            page_size=data.get("pageSize", DEFAULT_PAGE_SIZE),
            sort=data.get("sort") or ("submitted_at", "desc"),
        )


class AnalyticsFiltersSerializer(DateRangeMixin, serializers.Serializer):
    listingId = serializers.IntegerField(required=False, min_value=1, max_value=MAX_ID)
    bucket = serializers.ChoiceField(choices=BUCKET_CHOICES, required=False, default="month")

    def validate(self, attrs):
        attrs["from"], attrs["to"] = self.validate_date_range(attrs)
        return attrs

    def to_filters(self) -> AnalyticsFilters:
        data = self.validated_data
        return AnalyticsFilters(
            listing_id=data.get("listingId"),
            date_from=data.get("from"),
            date_to=data.get("to"),
            bucket=data.get("bucket", "month"),
        )


class ApproveReviewSerializer(serializers.Serializer):
    reviewId = serializers.IntegerField(min_value=1, max_value=MAX_ID)
    approved = serializers.BooleanField()
