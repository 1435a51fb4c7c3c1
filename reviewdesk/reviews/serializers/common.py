from rest_framework import serializers


class ListingRefSerializer(serializers.Serializer):
    """Public projection for nested listing references."""
    id = serializers.IntegerField()
    name = serializers.CharField()
