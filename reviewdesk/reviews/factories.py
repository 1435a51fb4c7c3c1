import random
from datetime import timedelta

import factory
from django.utils import timezone
from factory import Faker, LazyFunction
from factory.django import DjangoModelFactory

from .models import Listing, Review, ReviewSelectionLog
from .utils import mean_rating, slugify_listing_name

CHANNELS = ("airbnb", "booking.com", "vrbo", "expedia")
CATEGORIES = ("cleanliness", "communication", "location", "value", "check_in", "accuracy")
STREETS = ("Shoreditch Heights", "Regent's Canal View", "Hackney Road", "Upper Street", "Brick Lane")


def rand_categories():
    picked = random.sample(CATEGORIES, k=random.randint(2, 4))
    return {category: random.randint(5, 10) for category in picked}


def rand_submitted_at():
    return timezone.now() - timedelta(days=random.randint(1, 365), minutes=random.randint(0, 1440))

# ---------------------------------------------------------------------------

class ListingFactory(DjangoModelFactory):
    """Property; slug follows the name the way the sync derives it."""
    class Meta:
        model = Listing
        django_get_or_create = ("slug",)

    name = factory.Sequence(
        lambda n: f"{random.randint(1, 3)}B Unit {n} - {random.randint(1, 99)} {random.choice(STREETS)}"
    )
    slug = factory.LazyAttribute(lambda o: slugify_listing_name(o.name))
    channel = "hostaway"


class ReviewFactory(DjangoModelFactory):
    """Hostaway guest review, not approved, overall rating = mean of categories."""
    class Meta:
        model = Review

    source = Review.Source.HOSTAWAY
    external_id = factory.Sequence(lambda n: str(90000 + n))
    listing = factory.SubFactory(ListingFactory)
    type = Review.Type.GUEST_TO_HOST
    status = Review.Status.PUBLISHED
    categories = LazyFunction(rand_categories)
    rating_overall = factory.LazyAttribute(
        lambda o: mean_rating(o.categories.values()) if o.categories else None
    )
    text = Faker("sentence", nb_words=12)
    author_name = Faker("name")
    channel = LazyFunction(lambda: random.choice(CHANNELS))
    submitted_at = LazyFunction(rand_submitted_at)
    approved = False

    class Params:
        unrated = factory.Trait(categories=None, rating_overall=None)
        host_review = factory.Trait(type=Review.Type.HOST_TO_GUEST)


class ReviewSelectionLogFactory(DjangoModelFactory):
    class Meta:
        model = ReviewSelectionLog

    review = factory.SubFactory(ReviewFactory)
    action = ReviewSelectionLog.APPROVED
    actor = "admin"


class HostawayPayloadFactory(factory.DictFactory):
    """Raw Hostaway API record, camelCase as it comes over the wire."""
    id = factory.Sequence(lambda n: str(7000 + n))
    type = "guest-to-host"
    status = "published"
    rating = None
    publicReview = Faker("sentence", nb_words=10)
    reviewCategory = LazyFunction(
        lambda: [{"category": c, "rating": r} for c, r in rand_categories().items()]
    )
    submittedAt = LazyFunction(lambda: rand_submitted_at().strftime("%Y-%m-%d %H:%M:%S"))
    guestName = Faker("name")
    listingName = "2B N1 A - 29 Shoreditch Heights"
    channel = "airbnb"
