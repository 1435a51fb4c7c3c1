from django.urls import path

from .views_modules import (
    ReviewListView, ReviewAnalyticsView, ReviewApproveView,
    ListingStatsView, PublicReviewsView,
)

app_name = "reviews"

urlpatterns = [
    path("reviews/", ReviewListView.as_view(), name="review-list"),
    path("reviews/hostaway/", ReviewListView.as_view(), name="review-list-hostaway"),
    path("reviews/analytics/", ReviewAnalyticsView.as_view(), name="review-analytics"),
    path("reviews/approve/", ReviewApproveView.as_view(), name="review-approve"),
    path("listings/", ListingStatsView.as_view(), name="listing-stats"),
    path("public-reviews/<int:listing_id>/", PublicReviewsView.as_view(), name="public-reviews"),
]
