from django.db import models
from django.utils import timezone

from chefs.models import Chef


class CustomerContact(models.Model):
    """Customer PII, kept apart from inquiries so consent can be handled in one place."""

    class ConsentSource(models.TextChoices):
        CONTACT_FORM = "contact_form", "Contact form"
        NEWSLETTER_SIGNUP = "newsletter_signup", "Newsletter signup"
        ADMIN_IMPORT = "admin_import", "Admin import"

    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)
    name = models.CharField(max_length=200, blank=True)
    email_hash = models.CharField(max_length=64, unique=True)
    marketing_opt_in = models.BooleanField(default=False)
    consent_timestamp = models.DateTimeField(null=True, blank=True)
    consent_source = models.CharField(
        max_length=30,
        choices=ConsentSource.choices,
        default=ConsentSource.CONTACT_FORM,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name or self.email


class CustomerInquiryQuerySet(models.QuerySet):
    def open(self):
        model = self.model
        return self.filter(status__in=[model.Status.PENDING, model.Status.CONTACTED])

    def from_ip_since(self, ip_hash, since):
        return self.filter(ip_hash=ip_hash, created_at__gte=since)


class CustomerInquiry(models.Model):
    class ServiceType(models.TextChoices):
        WEEKLY_COOKING = "weekly_cooking", "Weekly home cooking"
        SPECIAL_EVENT = "special_event", "Special event catering"
        ONE_TIME = "one_time", "One-time cooking service"
        OTHER = "other", "Cooking services"

    class BudgetRange(models.TextChoices):
        UNDER_30 = "under_30", "Under £30"
        FROM_30_TO_50 = "30_50", "£30-50"
        FROM_50_TO_80 = "50_80", "£50-80"
        FROM_80_TO_100 = "80_100", "£80-100"
        OVER_100 = "100_plus", "£100+"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        CONTACTED = "contacted", "Contacted"
        CONVERTED = "converted", "Converted"
        CLOSED = "closed", "Closed"

    MAX_MESSAGE_LENGTH = 500

    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="inquiries")
    customer = models.ForeignKey(CustomerContact, on_delete=models.CASCADE, related_name="inquiries")
    service_type = models.CharField(max_length=20, choices=ServiceType.choices)
    budget_range = models.CharField(max_length=20, choices=BudgetRange.choices, blank=True)
    message = models.CharField(max_length=MAX_MESSAGE_LENGTH, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    ip_hash = models.CharField(max_length=64, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomerInquiryQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "Customer inquiries"
        constraints = [
            models.UniqueConstraint(fields=["chef", "customer"], name="unique_inquiry_per_chef_customer"),
        ]

    def __str__(self):
        return f"{self.customer} -> {self.chef} ({self.get_service_type_display()})"


class ContactClickEvent(models.Model):
    """Anonymous analytics for contact buttons. No PII."""

    class Source(models.TextChoices):
        CTA_BUTTON = "cta_button", "CTA button"
        MODAL_SUBMIT = "modal_submit", "Modal submit"
        SKIP_FORM = "skip_form", "Skip form"

    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="contact_clicks")
    source = models.CharField(max_length=20, choices=Source.choices)
    user_agent = models.CharField(max_length=255, blank=True)
    referrer = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.chef_id} {self.source} @ {self.created_at:%Y-%m-%d %H:%M}"
