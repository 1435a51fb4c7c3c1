from rest_framework import serializers

from reviewdesk.reviews.serializers.common import ListingRefSerializer


class NormalizedReviewSerializer(serializers.Serializer):
    """
    Canonical review shape on the wire.

    Renders both persisted Review rows and NormalizedReview values straight
    out of the normalizer (both expose `listing` with id and name).
    """
    id = serializers.IntegerField(allow_null=True)
    source = serializers.CharField()
    externalId = serializers.CharField(source="external_id", allow_null=True)
    listing = ListingRefSerializer()
    type = serializers.CharField()
    status = serializers.CharField()
    ratingOverall = serializers.FloatField(source="rating_overall", allow_null=True)
    categories = serializers.DictField(child=serializers.FloatField(), allow_null=True)
    text = serializers.CharField(allow_blank=True, allow_null=True)
    authorName = serializers.CharField(source="author_name", allow_blank=True, allow_null=True)
    channel = serializers.CharField(allow_blank=True, allow_null=True)
    submittedAt = serializers.DateTimeField(source="submitted_at")
    approved = serializers.BooleanField()


class ReviewPageSerializer(serializers.Serializer):
    items = NormalizedReviewSerializer(many=True)
    page = serializers.IntegerField()
    pageSize = serializers.IntegerField(source="page_size")
    total = serializers.IntegerField()


class PublicReviewsSerializer(serializers.Serializer):
    listing = ListingRefSerializer()
    items = NormalizedReviewSerializer(many=True)
