from rest_framework import serializers

from crm.models import ContactClickEvent, CustomerContact, CustomerInquiry


class CustomerContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomerContact
        fields = ["id", "name", "email", "phone", "marketing_opt_in", "consent_timestamp", "consent_source"]


class CustomerInquirySerializer(serializers.ModelSerializer):
    customer = CustomerContactSerializer(read_only=True)
    chef_name = serializers.CharField(source="chef.name", read_only=True)

    class Meta:
        model = CustomerInquiry
        fields = [
            "id",
            "chef",
            "chef_name",
            "customer",
            "service_type",
            "budget_range",
            "message",
            "status",
            "created_at",
        ]


class ContactClickSerializer(serializers.Serializer):
    source = serializers.ChoiceField(choices=ContactClickEvent.Source.choices)
