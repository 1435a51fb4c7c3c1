from django.http import Http404
from django.views.generic import TemplateView

from ..exceptions import ListingNotFound
from ..services.reviews import get_public_reviews_by_slug


class PropertyReviewsPageView(TemplateView):
    """Guest-facing property page showing approved reviews only."""
    template_name = "reviews/property_reviews.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        try:
            result = get_public_reviews_by_slug(kwargs["slug"])
        except ListingNotFound:
            raise Http404("Listing not found")
        context["listing"] = result.listing
        context["reviews"] = result.items
        return context
