from .review import ReviewListView, ReviewAnalyticsView, ReviewApproveView
from .listing import ListingStatsView, PublicReviewsView
from .public import PropertyReviewsPageView

__all__ = [
    "ReviewListView",
    "ReviewAnalyticsView",
    "ReviewApproveView",
    "ListingStatsView",
    "PublicReviewsView",
    "PropertyReviewsPageView",
]
