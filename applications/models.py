import uuid

from django.db import models
from django.utils import timezone

from chefs.models import Chef


def empty_file_uploads():
    return {'profile_photos': [], 'food_photos': [], 'introduction_videos': []}


class ChefQuestion(models.Model):
    """One admin-configured field of the chef application form."""

    class FieldType(models.TextChoices):
        TEXT = 'text', 'Text'
        TEXTAREA = 'textarea', 'Long text'
        EMAIL = 'email', 'Email'
        PHONE = 'phone', 'Phone'
        NUMBER = 'number', 'Number'
        PHOTO = 'photo', 'Photo upload'
        VIDEO = 'video', 'Video upload'

    field_key = models.SlugField(max_length=50, unique=True)
    label = models.CharField(max_length=200)
    hint_text = models.CharField(max_length=300, blank=True)
    field_type = models.CharField(max_length=20, choices=FieldType.choices, default=FieldType.TEXT)
    is_required = models.BooleanField(default=False)
    is_visible = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)
    max_length = models.PositiveIntegerField(null=True, blank=True)
    min_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    max_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    class Meta:
        ordering = ['display_order', 'id']

    def __str__(self):
        return f"{self.label} ({self.field_key})"

    def descriptor(self):
        from .fields import FieldDescriptor

        constraints = {
            name: getattr(self, name)
            for name in ('max_length', 'min_value', 'max_value')
            if getattr(self, name) is not None
        }
        return FieldDescriptor(
            key=self.field_key,
            label=self.label,
            kind=self.field_type,
            required=self.is_required,
            hint=self.hint_text,
            constraints=constraints,
        )


class ChefApplication(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    STATUS_TRANSITIONS = {
        Status.PENDING: frozenset({Status.APPROVED, Status.REJECTED}),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Keyed by ChefQuestion.field_key
    answers = models.JSONField(default=dict)
    file_uploads = models.JSONField(default=empty_file_uploads)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    admin_notes = models.TextField(blank=True)
    chef = models.ForeignKey(Chef, on_delete=models.SET_NULL, null=True, blank=True, related_name='applications')
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.applicant_name or 'Application'} ({self.status})"

    def answer(self, key, default=''):
        value = self.answers.get(key)
        return default if value in (None, '') else value

    @property
    def applicant_name(self):
        return self.answer('full_name')

    @property
    def applicant_email(self):
        return self.answer('email')

    def uploads(self, kind):
        return list((self.file_uploads or {}).get(kind) or [])
