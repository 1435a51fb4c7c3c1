from django.contrib import admin, messages

from .models import Listing, Review, ReviewSelectionLog
from .services.reviews import approve_review


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'slug', 'channel', 'created_at')
    search_fields = ('name', 'slug')
    readonly_fields = ('slug', 'created_at')
    ordering = ('name',)


def _set_approval(modeladmin, request, qs, approved):
    # one call per review so every change lands in the selection log
    actor = request.user.get_username()
    for review_id in qs.values_list('pk', flat=True):
        approve_review(review_id, approved, actor=actor)
    modeladmin.message_user(
        request,
        f"{len(qs)} review(s) {'approved' if approved else 'unapproved'}.",
        messages.SUCCESS,
    )


@admin.action(description="Approve selected reviews")
def approve_reviews(modeladmin, request, qs):
    _set_approval(modeladmin, request, qs, True)


@admin.action(description="Unapprove selected reviews")
def unapprove_reviews(modeladmin, request, qs):
    _set_approval(modeladmin, request, qs, False)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'listing', 'author_name', 'type', 'status',
        'rating_overall', 'channel', 'approved', 'submitted_at'
    )
    list_filter = (
        'approved',
        'source',
        'type',
        'status',
        'channel',
        'listing',
        'submitted_at',
    )
    date_hierarchy = 'submitted_at'
    search_fields = ('id', 'external_id', 'author_name', 'text', 'listing__name')
    # approval only changes through the actions below
    readonly_fields = ('approved', 'created_at', 'updated_at')
    list_select_related = ('listing',)
    actions = (approve_reviews, unapprove_reviews)


@admin.register(ReviewSelectionLog)
class ReviewSelectionLogAdmin(admin.ModelAdmin):
    list_display = ('id', 'review', 'action', 'actor', 'created_at')
    list_filter = ('action', 'created_at')
    search_fields = ('review__id', 'actor')
    list_select_related = ('review',)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
