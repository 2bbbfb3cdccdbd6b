from django.contrib import admin

from .models import UserRole


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ('user', 'current_role')
    list_filter = ('current_role',)
    search_fields = ('user__username', 'user__email')
