from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import permissions
from rest_framework.views import APIView

from ..serializers import ListingStatsSerializer, PublicReviewsSerializer
from ..services.analytics import get_listings_with_stats
from ..services.reviews import get_public_reviews
from .common import success_response


@extend_schema(
    summary="Listings with review stats",
    description="Listings that have reviews, with average rating and review count.",
    responses={200: ListingStatsSerializer(many=True)},
)
class ListingStatsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        data = ListingStatsSerializer(get_listings_with_stats(), many=True).data
        return success_response(data)


@extend_schema(
    summary="Approved reviews of a listing",
    description="Public feed: only approved reviews, newest first.",
    responses={
        200: PublicReviewsSerializer,
        404: OpenApiResponse(description="Listing not found"),
    },
)
class PublicReviewsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, listing_id):
        result = get_public_reviews(listing_id)
        return success_response(PublicReviewsSerializer(result).data)
