from django.contrib import admin

from .models import ChefApplication, ChefQuestion


@admin.register(ChefQuestion)
class ChefQuestionAdmin(admin.ModelAdmin):
    list_display = ('label', 'field_key', 'field_type', 'is_required', 'is_visible', 'display_order')
    list_editable = ('is_required', 'is_visible', 'display_order')
    list_filter = ('field_type', 'is_visible')
    prepopulated_fields = {'field_key': ('label',)}


@admin.register(ChefApplication)
class ChefApplicationAdmin(admin.ModelAdmin):
    list_display = ('applicant_name', 'applicant_email', 'status', 'created_at')
    list_filter = ('status',)
    readonly_fields = ('answers', 'file_uploads', 'chef', 'approved_at', 'rejected_at')
