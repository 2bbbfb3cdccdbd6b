from rest_framework import serializers

from reviews.models import Review
from reviews.serializers import PublicReviewSerializer

from .models import Chef, ChefAuditLog, ChefRatingStats, ChefVideo, FoodPhoto


class RatingStatsSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChefRatingStats
        fields = ['review_count', 'avg_rating', 'latest_review_date']


class FoodPhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = FoodPhoto
        fields = ['id', 'photo_url', 'display_order']


class ChefVideoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChefVideo
        fields = ['id', 'video_url', 'video_type', 'display_order']


class ChefListSerializer(serializers.ModelSerializer):
    cuisines = serializers.SerializerMethodField()
    rating_stats = serializers.SerializerMethodField()

    class Meta:
        model = Chef
        fields = [
            'id', 'name', 'bio', 'hourly_rate', 'location_label', 'latitude', 'longitude',
            'photo_url', 'languages', 'cuisines', 'rating_stats',
        ]

    def get_cuisines(self, obj):
        return obj.cuisine_names

    def get_rating_stats(self, obj):
        try:
            return RatingStatsSerializer(obj.rating_stats).data
        except ChefRatingStats.DoesNotExist:
            return {'review_count': 0, 'avg_rating': None, 'latest_review_date': None}


class ChefDetailSerializer(ChefListSerializer):
    food_photos = FoodPhotoSerializer(many=True, read_only=True)
    videos = ChefVideoSerializer(many=True, read_only=True)
    reviews = serializers.SerializerMethodField()

    class Meta(ChefListSerializer.Meta):
        fields = ChefListSerializer.Meta.fields + [
            'phone', 'experience', 'food_photos', 'videos', 'reviews',
        ]

    def get_reviews(self, obj):
        published = obj.reviews.filter(status=Review.Status.PUBLISHED).order_by('-published_at', '-created_at')
        return PublicReviewSerializer(published, many=True).data


class AdminChefSerializer(ChefDetailSerializer):
    """Everything an admin edits, regardless of status."""

    class Meta(ChefDetailSerializer.Meta):
        fields = ChefDetailSerializer.Meta.fields + [
            'email', 'verified', 'status', 'created_at', 'updated_at',
        ]

    def get_reviews(self, obj):
        return obj.reviews.count()


class ChefAuditLogSerializer(serializers.ModelSerializer):
    admin_user = serializers.CharField(source='admin_user.username', read_only=True, default=None)

    class Meta:
        model = ChefAuditLog
        fields = ['id', 'chef', 'chef_name', 'action', 'metadata', 'admin_user', 'created_at']
