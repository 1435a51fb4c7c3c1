from django.db import models
from django.utils.translation import gettext_lazy as _


class Review(models.Model):
    class Source(models.TextChoices):
        HOSTAWAY = "hostaway", "Hostaway"
        GOOGLE = "google", "Google"

    class Type(models.TextChoices):
        GUEST_TO_HOST = "guest-to-host", "Guest to host"
        HOST_TO_GUEST = "host-to-guest", "Host to guest"

    class Status(models.TextChoices):
        PUBLISHED = "published", "Published"
        DRAFT = "draft", "Draft"
        HIDDEN = "hidden", "Hidden"

    source = models.CharField(max_length=20, choices=Source.choices, default=Source.HOSTAWAY)
    # Id in the source system; unique per source (upsert key)
    external_id = models.CharField(max_length=64, null=True, blank=True)

    listing = models.ForeignKey("Listing", on_delete=models.CASCADE, related_name="reviews")

    type = models.CharField(max_length=20, choices=Type.choices)
    status = models.CharField(max_length=20, choices=Status.choices)

    # Derived from category ratings at normalization time when the source has none
    rating_overall = models.FloatField(null=True, blank=True)
    categories = models.JSONField(null=True, blank=True)

    text = models.TextField(blank=True, default="")
    author_name = models.CharField(max_length=255, blank=True, default="")
    channel = models.CharField(max_length=50, blank=True, default="")
    submitted_at = models.DateTimeField(db_index=True)

    # Only the approval workflow touches this flag
    approved = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-submitted_at"]
        constraints = [
            models.UniqueConstraint(fields=["source", "external_id"], name="review_source_external_id_uniq"),
        ]
        indexes = [
            models.Index(fields=["listing", "approved", "submitted_at"], name="review_public_idx"),
            models.Index(fields=["listing", "rating_overall"], name="review_listing_rating_idx"),
        ]

    def __str__(self):
        return f"Review {self.id} ({self.source}:{self.external_id}) on listing {self.listing_id}"

    def clean(self):
        from django.core.exceptions import ValidationError

        if self.rating_overall is not None and not (0 <= self.rating_overall <= 10):
            raise ValidationError({"rating_overall": _("Rating must be between 0 and 10")})
