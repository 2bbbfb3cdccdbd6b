from django.contrib import admin

from .models import ContactClickEvent, CustomerContact, CustomerInquiry


class CustomerInquiryInline(admin.TabularInline):
    model = CustomerInquiry
    extra = 0
    fields = ("chef", "service_type", "budget_range", "status", "created_at")
    readonly_fields = ("created_at",)


@admin.register(CustomerContact)
class CustomerContactAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "marketing_opt_in", "consent_source", "created_at")
    list_filter = ("marketing_opt_in", "consent_source")
    search_fields = ("name", "email", "phone")
    readonly_fields = ("email_hash",)
    inlines = [CustomerInquiryInline]


@admin.register(CustomerInquiry)
class CustomerInquiryAdmin(admin.ModelAdmin):
    list_display = ("customer", "chef", "service_type", "budget_range", "status", "created_at")
    list_filter = ("status", "service_type", "budget_range")
    search_fields = ("customer__name", "customer__email", "chef__name", "message")
    readonly_fields = ("ip_hash",)


@admin.register(ContactClickEvent)
class ContactClickEventAdmin(admin.ModelAdmin):
    list_display = ("chef", "source", "created_at")
    list_filter = ("source",)
