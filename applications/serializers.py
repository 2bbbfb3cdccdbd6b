from rest_framework import serializers

from .models import ChefApplication, ChefQuestion
from .storage import UPLOAD_KINDS


class ChefQuestionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChefQuestion
        fields = [
            'id', 'field_key', 'label', 'hint_text', 'field_type', 'is_required',
            'is_visible', 'display_order', 'max_length', 'min_value', 'max_value',
        ]


class ChefApplicationSerializer(serializers.ModelSerializer):
    applicant_name = serializers.CharField(read_only=True)
    applicant_email = serializers.CharField(read_only=True)

    class Meta:
        model = ChefApplication
        fields = [
            'id', 'applicant_name', 'applicant_email', 'answers', 'file_uploads', 'status',
            'admin_notes', 'chef', 'created_at', 'updated_at', 'approved_at', 'rejected_at',
        ]


class UploadSerializer(serializers.Serializer):
    application_id = serializers.UUIDField()
    kind = serializers.ChoiceField(choices=UPLOAD_KINDS)
    file = serializers.FileField()
