import uuid

from django.db import models
from django.utils import timezone

from chefs.models import Chef


class Review(models.Model):
    RATING_CHOICES = [(i, f"{i}") for i in range(1, 6)]
    MAX_COMMENT_LENGTH = 280

    class Status(models.TextChoices):
        AWAITING_EMAIL = "awaiting_email", "Awaiting email verification"
        PUBLISHED = "published", "Published"
        SPAM = "spam", "Spam"

    STATUS_TRANSITIONS = {
        Status.AWAITING_EMAIL: frozenset({Status.PUBLISHED, Status.SPAM}),
        Status.PUBLISHED: frozenset({Status.SPAM}),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(choices=RATING_CHOICES)
    comment = models.CharField(max_length=MAX_COMMENT_LENGTH, blank=True)
    # Hashes only; the raw email and IP are never stored.
    email_hash = models.CharField(max_length=64)
    ip_hash = models.CharField(max_length=64, db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AWAITING_EMAIL)
    verification_token = models.CharField(max_length=64, null=True, blank=True, unique=True)
    verification_expires_at = models.DateTimeField(null=True, blank=True)
    trust_score = models.FloatField(default=0.0)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    verified_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['chef', 'email_hash'], name='unique_review_per_chef_email'),
        ]

    def __str__(self):
        return f"Review for {self.chef_id} - {self.rating}/5 ({self.status})"

    def verification_expired(self, now=None):
        return bool(self.verification_expires_at and self.verification_expires_at < (now or timezone.now()))


class ReviewEventQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise TypeError("Review events are append-only")


class ReviewEvent(models.Model):
    """Append-only history of a review's status changes."""

    class Actor(models.TextChoices):
        USER = "user", "User"
        ADMIN = "admin", "Admin"
        SYSTEM = "system", "System"

    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name='events')
    from_status = models.CharField(max_length=20, choices=Review.Status.choices, null=True, blank=True)
    to_status = models.CharField(max_length=20, choices=Review.Status.choices)
    actor = models.CharField(max_length=10, choices=Actor.choices)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = ReviewEventQuerySet.as_manager()

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.review_id}: {self.from_status} -> {self.to_status} ({self.actor})"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise TypeError("Review events are append-only")
        super().save(*args, **kwargs)

    @classmethod
    def record(cls, review, from_status, to_status, actor, notes=''):
        return cls.objects.create(
            review=review,
            from_status=from_status,
            to_status=to_status,
            actor=actor,
            notes=notes,
        )
