
from drf_spectacular.utils import (
    extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)
from rest_framework import permissions
from rest_framework.views import APIView

from ..serializers import (
    ReviewFiltersSerializer, ReviewPageSerializer,
    AnalyticsFiltersSerializer, AnalyticsSerializer,
    ApproveReviewSerializer,
)
from ..services.analytics import get_analytics
from ..services.reviews import DEFAULT_ACTOR, approve_review, get_reviews
from ..throttling import ScopedRateThrottleIsolated
from .common import success_response


DATE_RANGE_PARAMETERS = [
    OpenApiParameter("from", OpenApiTypes.STR, description="Submitted on or after (YYYY-MM-DD or ISO datetime)"),
    OpenApiParameter("to", OpenApiTypes.STR, description="Submitted on or before (YYYY-MM-DD covers the whole day)"),
]


@extend_schema(
    summary="List reviews",
    description="Paginated, filtered list of normalized reviews. `total` counts the whole filtered set.",
    parameters=[
        OpenApiParameter("listingId", OpenApiTypes.INT, description="Listing id"),
        OpenApiParameter("type", OpenApiTypes.STR, enum=["guest-to-host", "host-to-guest"]),
        OpenApiParameter("status", OpenApiTypes.STR, enum=["published", "draft", "hidden"]),
        OpenApiParameter("channel", OpenApiTypes.STR, description="Exact channel, e.g. airbnb"),
        OpenApiParameter("approved", OpenApiTypes.BOOL, description="Approval state"),
        OpenApiParameter("minRating", OpenApiTypes.NUMBER, description="Minimum overall rating (0-10)"),
        OpenApiParameter("maxRating", OpenApiTypes.NUMBER, description="Maximum overall rating (0-10)"),
        *DATE_RANGE_PARAMETERS,
        OpenApiParameter("q", OpenApiTypes.STR, description="Search in review text or author name"),
        OpenApiParameter("page", OpenApiTypes.INT, default=1),
        OpenApiParameter("pageSize", OpenApiTypes.INT, default=20, description="1-100"),
        OpenApiParameter(
            "sort", OpenApiTypes.STR, default="submittedAt:desc",
            description="field:direction, e.g. ratingOverall:asc",
        ),
    ],
    responses={
        200: ReviewPageSerializer,
        400: OpenApiResponse(description="Invalid filter parameters"),
    },
)
class ReviewListView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        # plain dict: a missing `approved` must stay missing, not become False
        serializer = ReviewFiltersSerializer(data=request.query_params.dict())
        serializer.is_valid(raise_exception=True)
        page = get_reviews(serializer.to_filters())
        return success_response(ReviewPageSerializer(page).data)


@extend_schema(
    summary="Review analytics",
    description="Top listings, category averages, rating trend and low-scoring categories.",
    parameters=[
        OpenApiParameter("listingId", OpenApiTypes.INT, description="Listing id"),
        *DATE_RANGE_PARAMETERS,
        OpenApiParameter("bucket", OpenApiTypes.STR, enum=["day", "week", "month"], default="month"),
    ],
    responses={
        200: OpenApiResponse(
            response=AnalyticsSerializer,
            description="Analytics aggregate",
            examples=[
                OpenApiExample(
                    "Example response",
                    value={
                        "status": "success",
                        "data": {
                            "topListings": [
                                {"listingId": 1, "name": "2B N1 A - 29 Shoreditch Heights", "avgRating": 9.2, "count": 3},
                            ],
                            "categoryAverages": {"cleanliness": 8.7, "wifi": 4.0},
                            "trend": [{"bucket": "2024-07", "avgRating": 6.3, "count": 1}],
                            "issues": [{"category": "wifi", "avg": 4.0, "delta": None}],
                        },
                    },
                )
            ],
        ),
        400: OpenApiResponse(description="Invalid parameters"),
    },
)
class ReviewAnalyticsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        serializer = AnalyticsFiltersSerializer(data=request.query_params.dict())
        serializer.is_valid(raise_exception=True)
        data = get_analytics(serializer.to_filters())
        return success_response(AnalyticsSerializer(data).data)


@extend_schema(
    summary="Approve or unapprove a review",
    description="Sets the approval flag and records an audit entry. Repeated calls are each recorded.",
    request=ApproveReviewSerializer,
    examples=[
        OpenApiExample("Approve", value={"reviewId": 12, "approved": True}, request_only=True),
    ],
    responses={
        200: OpenApiResponse(description="{reviewId, approved}"),
        400: OpenApiResponse(description="Validation error"),
        404: OpenApiResponse(description="Review not found"),
    },
)
class ReviewApproveView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [ScopedRateThrottleIsolated]
    throttle_scope = "reviews_approve"

    def post(self, request):
        serializer = ApproveReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor = request.user.get_username() if request.user.is_authenticated else DEFAULT_ACTOR
        review = approve_review(
            serializer.validated_data["reviewId"],
            serializer.validated_data["approved"],
            actor=actor,
        )
        return success_response({"reviewId": review.id, "approved": review.approved})
