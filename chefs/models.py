import uuid

from django.conf import settings
from django.db import models
from django.db.models import Avg, Count, Max
from django.utils import timezone


class ChefQuerySet(models.QuerySet):
    def public(self):
        """Chefs customers can see, review and contact."""
        return self.filter(status=self.model.Status.PUBLISHED, verified=True)

    def not_deleted(self):
        return self.exclude(status=self.model.Status.DELETED)


class Chef(models.Model):
    class Status(models.TextChoices):
        PUBLISHED = "published", "Published"
        UNPUBLISHED = "unpublished", "Unpublished"
        DELETED = "deleted", "Deleted"

    STATUS_TRANSITIONS = {
        Status.PUBLISHED: frozenset({Status.UNPUBLISHED, Status.DELETED}),
        Status.UNPUBLISHED: frozenset({Status.PUBLISHED, Status.DELETED}),
        Status.DELETED: frozenset({Status.UNPUBLISHED}),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    bio = models.TextField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    hourly_rate = models.DecimalField(max_digits=7, decimal_places=2, null=True, blank=True)
    location_label = models.CharField(max_length=200, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    experience = models.CharField(max_length=500, blank=True)
    languages = models.JSONField(default=list, blank=True)
    photo_url = models.CharField(max_length=500, blank=True)
    # Admin approval for platform listing; kept in sync with status
    verified = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PUBLISHED)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ChefQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "verified"], name="chef_status_verified_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def first_name(self):
        return self.name.split(" ")[0] if self.name else ""

    @property
    def is_public(self):
        return self.status == self.Status.PUBLISHED and self.verified

    @property
    def cuisine_names(self):
        return [c.cuisine for c in self.cuisines.all()]


class ChefCuisine(models.Model):
    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="cuisines")
    cuisine = models.CharField(max_length=100)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.cuisine


class FoodPhoto(models.Model):
    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="food_photos")
    photo_url = models.CharField(max_length=500)
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return f"FoodPhoto(chef_id={self.chef_id}, order={self.display_order})"


class ChefVideo(models.Model):
    chef = models.ForeignKey(Chef, on_delete=models.CASCADE, related_name="videos")
    video_url = models.CharField(max_length=500)
    video_type = models.CharField(max_length=50, default="introduction")
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order", "id"]

    def __str__(self):
        return f"ChefVideo(chef_id={self.chef_id}, type={self.video_type})"


class ChefAuditLog(models.Model):
    class Action(models.TextChoices):
        CREATED = "created", "Created"
        UPDATED = "updated", "Updated"
        PUBLISHED = "published", "Published"
        UNPUBLISHED = "unpublished", "Unpublished"
        DELETED = "deleted", "Deleted"

    # Permanent deletes keep their audit row, so no cascade here.
    chef = models.ForeignKey(Chef, on_delete=models.SET_NULL, null=True, blank=True, related_name="audit_log")
    chef_name = models.CharField(max_length=200, blank=True)
    action = models.CharField(max_length=20, choices=Action.choices)
    metadata = models.JSONField(default=dict, blank=True)
    admin_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="chef_audit_entries",
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.get_action_display()} {self.chef_name or self.chef_id} on {self.created_at:%Y-%m-%d}"


class ChefRatingStats(models.Model):
    """Denormalised rating summary, recomputed from published reviews."""
    chef = models.OneToOneField(Chef, on_delete=models.CASCADE, primary_key=True, related_name="rating_stats")
    review_count = models.PositiveIntegerField(default=0)
    avg_rating = models.DecimalField(max_digits=3, decimal_places=2, null=True, blank=True)
    latest_review_date = models.DateTimeField(null=True, blank=True)
    refreshed_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Chef rating stats"

    def __str__(self):
        return f"{self.chef_id}: {self.avg_rating} ({self.review_count})"

    @classmethod
    def refresh_for(cls, chef_id):
        from reviews.models import Review

        summary = Review.objects.filter(chef_id=chef_id, status=Review.Status.PUBLISHED).aggregate(
            review_count=Count("id"),
            avg_rating=Avg("rating"),
            latest_review_date=Max("published_at"),
        )
        avg = summary["avg_rating"]
        stats, _ = cls.objects.update_or_create(
            chef_id=chef_id,
            defaults={
                "review_count": summary["review_count"] or 0,
                "avg_rating": round(avg, 2) if avg is not None else None,
                "latest_review_date": summary["latest_review_date"],
            },
        )
        return stats
