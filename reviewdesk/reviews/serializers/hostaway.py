from rest_framework import serializers

from reviewdesk.reviews.models import Review
from reviewdesk.reviews.utils import parse_timestamp, slugify_listing_name


class HostawayCategorySerializer(serializers.Serializer):
    category = serializers.CharField()
    rating = serializers.FloatField()


class HostawayReviewSerializer(serializers.Serializer):
    """
    Raw review record as returned by the Hostaway reviews endpoint.
    Keys are the upstream camelCase names; unknown keys are ignored.
    """
    id = serializers.CharField(max_length=64)
    type = serializers.ChoiceField(choices=Review.Type.choices)
    status = serializers.ChoiceField(choices=Review.Status.choices)
    rating = serializers.FloatField(required=False, allow_null=True)
    publicReview = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    reviewCategory = HostawayCategorySerializer(many=True, required=False, allow_null=True)
    submittedAt = serializers.CharField()
    guestName = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    listingName = serializers.CharField(max_length=255)
    channel = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_submittedAt(self, value):
        parsed = parse_timestamp(value)
        if parsed is None:
            raise serializers.ValidationError("Expected an ISO-8601 timestamp.")
        return parsed

    def validate_listingName(self, value):
        # listings are keyed by slug; a name without letters or digits has none
        if not slugify_listing_name(value):
            raise serializers.ValidationError("Listing name must contain letters or digits.")
        return value
