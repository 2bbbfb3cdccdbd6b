from rest_framework import serializers

from .models import Review, ReviewEvent


class PublicReviewSerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = ['id', 'rating', 'comment', 'published_at']


class ReviewEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReviewEvent
        fields = ['from_status', 'to_status', 'actor', 'notes', 'created_at']


class AdminReviewSerializer(serializers.ModelSerializer):
    chef_name = serializers.CharField(source='chef.name', read_only=True)
    events = ReviewEventSerializer(many=True, read_only=True)

    class Meta:
        model = Review
        fields = [
            'id', 'chef', 'chef_name', 'rating', 'comment', 'status', 'trust_score',
            'created_at', 'verified_at', 'published_at', 'events',
        ]
