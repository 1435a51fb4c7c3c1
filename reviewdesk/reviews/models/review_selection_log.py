from django.db import models


class ReviewSelectionLog(models.Model):
    """Append-only audit trail of approval changes; one row per approve/unapprove call."""
    APPROVED = "approved"
    UNAPPROVED = "unapproved"
    ACTION_CHOICES = [
        (APPROVED, "Approved"),
        (UNAPPROVED, "Unapproved"),
    ]

    review = models.ForeignKey("Review", on_delete=models.CASCADE, related_name="selection_logs")
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    actor = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["review", "created_at"], name="selectionlog_review_idx"),
        ]

    def __str__(self):
        return f"{self.action} review {self.review_id} by {self.actor or 'unknown'}"
