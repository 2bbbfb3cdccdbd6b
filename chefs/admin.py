import logging

from django.contrib import admin

from .models import Chef, ChefAuditLog, ChefCuisine, ChefRatingStats, ChefVideo, FoodPhoto

logger = logging.getLogger(__name__)


class ChefCuisineInline(admin.TabularInline):
    model = ChefCuisine
    extra = 1


class FoodPhotoInline(admin.TabularInline):
    model = FoodPhoto
    extra = 1


class ChefVideoInline(admin.TabularInline):
    model = ChefVideo
    extra = 0


@admin.register(Chef)
class ChefAdmin(admin.ModelAdmin):
    list_display = ('name', 'location_label', 'status', 'verified', 'created_at')
    list_filter = ('status', 'verified')
    search_fields = ('name', 'email', 'location_label')
    inlines = [ChefCuisineInline, FoodPhotoInline, ChefVideoInline]


@admin.register(ChefAuditLog)
class ChefAuditLogAdmin(admin.ModelAdmin):
    list_display = ('chef_name', 'action', 'admin_user', 'created_at')
    list_filter = ('action',)
    readonly_fields = ('chef', 'chef_name', 'action', 'metadata', 'admin_user', 'created_at')


@admin.register(ChefRatingStats)
class ChefRatingStatsAdmin(admin.ModelAdmin):
    list_display = ('chef', 'review_count', 'avg_rating', 'latest_review_date')
    actions = ['refresh_stats']

    @admin.action(description="Recompute from published reviews")
    def refresh_stats(self, request, queryset):
        from .services import refresh_chef_rating_stats

        for stats in queryset:
            refresh_chef_rating_stats(stats.chef_id)
        logger.info(f"Refreshed rating stats for {queryset.count()} chefs")
        self.message_user(request, f"Refreshed {queryset.count()} chefs.")
