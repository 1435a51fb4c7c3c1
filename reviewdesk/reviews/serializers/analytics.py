from rest_framework import serializers


class TopListingSerializer(serializers.Serializer):
    listingId = serializers.IntegerField()
    name = serializers.CharField()
    avgRating = serializers.FloatField(allow_null=True)
    count = serializers.IntegerField()


class TrendPointSerializer(serializers.Serializer):
    bucket = serializers.CharField()
    avgRating = serializers.FloatField(allow_null=True)
    count = serializers.IntegerField()


class IssueSerializer(serializers.Serializer):
    category = serializers.CharField()
    avg = serializers.FloatField()
    delta = serializers.FloatField(allow_null=True)


class AnalyticsSerializer(serializers.Serializer):
    topListings = TopListingSerializer(many=True)
    categoryAverages = serializers.DictField(child=serializers.FloatField())
    trend = TrendPointSerializer(many=True)
    issues = IssueSerializer(many=True)


class ListingStatsSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    avgRating = serializers.FloatField(allow_null=True)
    reviewCount = serializers.IntegerField()
