"""Outreach form serializers."""

from collections.abc import Mapping

from rest_framework import serializers

from .models import ContactMessage, PartnershipInquiry, WorkshopRegistration


class FormSerializer(serializers.ModelSerializer):
    """
    Checks `required_fields` (wire names) up front and reports every blank
    one in a single message: "Missing required fields: a, b".
    """

    required_fields = ()

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            missing = [name for name in self.required_fields if not str(data.get(name) or "").strip()]
            if missing:
                raise serializers.ValidationError(
                    {"non_field_errors": [f"Missing required fields: {', '.join(missing)}"]}
                )
        return super().to_internal_value(data)


class ContactMessageSerializer(FormSerializer):
    required_fields = ("name", "email", "message")

    submittedAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model  = ContactMessage
        fields = ["id", "name", "email", "phone", "subject", "message", "submittedAt"]


class PartnershipInquirySerializer(FormSerializer):
    required_fields = ("orgName", "orgType", "contactPerson", "contactEmail", "partnershipInterest")

    orgName             = serializers.CharField(source="org_name", max_length=200)
    orgType             = serializers.CharField(source="org_type", max_length=100)
    orgSize             = serializers.CharField(source="org_size", max_length=50, required=False, allow_blank=True)
    contactPerson       = serializers.CharField(source="contact_person", max_length=120)
    contactEmail        = serializers.EmailField(source="contact_email")
    contactPhone        = serializers.CharField(source="contact_phone", max_length=30, required=False,
                                                allow_blank=True)
    partnershipInterest = serializers.CharField(source="partnership_interest", max_length=200)
    partnershipGoals    = serializers.CharField(source="partnership_goals", required=False, allow_blank=True)
    availableResources  = serializers.CharField(source="available_resources", required=False, allow_blank=True)
    timeline            = serializers.CharField(max_length=100, required=False, allow_blank=True)
    additionalInfo      = serializers.CharField(source="additional_info", required=False, allow_blank=True)
    submittedAt         = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model  = PartnershipInquiry
        fields = [
            "id", "orgName", "orgType", "orgSize", "contactPerson", "contactEmail",
            "contactPhone", "partnershipInterest", "partnershipGoals",
            "availableResources", "timeline", "additionalInfo", "submittedAt",
        ]


class WorkshopRegistrationSerializer(FormSerializer):
    required_fields = ("fullName", "email", "phone")

    fullName       = serializers.CharField(source="full_name", max_length=120)
    workshop       = serializers.CharField(max_length=200, required=False, allow_blank=True)
    organization   = serializers.CharField(max_length=200, required=False, allow_blank=True)
    message        = serializers.CharField(required=False, allow_blank=True)
    workflowStatus = serializers.CharField(source="workflow_status", read_only=True)
    submittedAt    = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model  = WorkshopRegistration
        fields = [
            "id", "fullName", "email", "phone", "workshop", "organization",
            "message", "workflowStatus", "submittedAt",
        ]

    def create(self, validated_data):
        # Keep every submitted key for the workflow, not only the modelled ones
        validated_data["payload"] = {key: value for key, value in self.initial_data.items()}
        return super().create(validated_data)
