from django.contrib import admin

from .models import Review, ReviewEvent


class ReviewEventInline(admin.TabularInline):
    model = ReviewEvent
    extra = 0
    can_delete = False
    readonly_fields = ('from_status', 'to_status', 'actor', 'notes', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('chef', 'rating', 'status', 'trust_score', 'created_at', 'published_at')
    list_filter = ('status',)
    search_fields = ('chef__name', 'comment')
    readonly_fields = ('email_hash', 'ip_hash', 'verification_token', 'verification_expires_at', 'trust_score')
    inlines = [ReviewEventInline]
