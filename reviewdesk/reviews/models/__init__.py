from .listing import Listing
from .review import Review
from .review_selection_log import ReviewSelectionLog

__all__ = [
    "Listing",
    "Review",
    "ReviewSelectionLog",
]
