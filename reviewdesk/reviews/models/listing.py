from django.db import models

from reviewdesk.reviews.utils import slugify_listing_name


class Listing(models.Model):
    """A property that reviews are written about. Created lazily by the sync."""
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    channel = models.CharField(max_length=50, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify_listing_name(self.name)
        super().save(*args, **kwargs)
