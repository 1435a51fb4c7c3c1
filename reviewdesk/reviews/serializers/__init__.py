from .common import ListingRefSerializer
from .hostaway import HostawayReviewSerializer, HostawayCategorySerializer
from .review import NormalizedReviewSerializer, ReviewPageSerializer, PublicReviewsSerializer
from .filters import ReviewFiltersSerializer, AnalyticsFiltersSerializer, ApproveReviewSerializer
from .analytics import (
    AnalyticsSerializer, ListingStatsSerializer, TopListingSerializer,
    TrendPointSerializer, IssueSerializer,
)

__all__ = [
    "ListingRefSerializer",
    "HostawayReviewSerializer",
    "HostawayCategorySerializer",
    "NormalizedReviewSerializer",
    "ReviewPageSerializer",
    "PublicReviewsSerializer",
    "ReviewFiltersSerializer",
    "AnalyticsFiltersSerializer",
    "ApproveReviewSerializer",
    "AnalyticsSerializer",
    "ListingStatsSerializer",
    "TopListingSerializer",
    "TrendPointSerializer",
    "IssueSerializer",
]
