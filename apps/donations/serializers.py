"""Donation serializers: camelCase on the wire, snake_case in the model."""

from decimal import Decimal

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import Donation


class DonationSerializer(serializers.ModelSerializer):
    donorName     = serializers.CharField(source="donor_name", max_length=120)
    donorEmail    = serializers.EmailField(source="donor_email")
    amount        = serializers.DecimalField(max_digits=12, decimal_places=2,
                                             min_value=Decimal("0.01"), coerce_to_string=False)
    paymentMethod = serializers.ChoiceField(source="payment_method", choices=Donation.Method.choices)
    paymentStatus = serializers.ChoiceField(source="payment_status", choices=Donation.Status.choices,
                                            required=False)
    transactionId = serializers.CharField(
        source="reference", max_length=64,
        validators=[UniqueValidator(queryset=Donation.objects.all(),
                                    message="A donation with this transaction ID already exists.")],
    )
    paidAt        = serializers.DateTimeField(source="paid_at", read_only=True)
    createdAt     = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt     = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model  = Donation
        fields = [
            "id", "donorName", "donorEmail", "phone", "amount", "currency",
            "paymentMethod", "paymentStatus", "transactionId",
            "paidAt", "createdAt", "updatedAt",
        ]


class DonationStatusSerializer(serializers.Serializer):
    paymentStatus = serializers.ChoiceField(
        choices=Donation.Status.choices,
        error_messages={"required": "Payment status is required"},
    )


class DonationStatsSerializer(serializers.Serializer):
    totalDonations     = serializers.IntegerField()
    totalAmount        = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False)
    averageDonation    = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False)
    completedDonations = serializers.IntegerField()
    pendingDonations   = serializers.IntegerField()
    failedDonations    = serializers.IntegerField()
    thisMonthDonations = serializers.IntegerField()
    thisMonthAmount    = serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False)
