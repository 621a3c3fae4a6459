"""Payment serializers: the donation intent coming off the donate page."""
from decimal import Decimal

from rest_framework import serializers

from apps.donations.models import Donation

STRIPE_CURRENCIES = (Donation.Currency.USD, Donation.Currency.EUR)


class DonationIntentSerializer(serializers.Serializer):
    """
    Validates an initiation request. Field checks run in a fixed order so
    the first complaint is always the same for the same input:
    identity, then method, then currency.
    """

    email         = serializers.EmailField(required=False, allow_blank=True)
    donorName     = serializers.CharField(source="donor_name", max_length=120, required=False,
                                          allow_blank=True, trim_whitespace=True)
    phone         = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    amount        = serializers.DecimalField(max_digits=12, decimal_places=2, required=False,
                                             allow_null=True, min_value=Decimal("1.00"))
    currency      = serializers.CharField(max_length=3, required=False, allow_blank=True, allow_null=True)
    paymentMethod = serializers.CharField(source="payment_method", required=False, allow_blank=True)

    def validate(self, data):
        if not data.get("email") or not data.get("donor_name"):
            raise serializers.ValidationError("Email and donor name are required")

        method = data.get("payment_method")
        if method not in Donation.Method.values:
            raise serializers.ValidationError("Invalid payment method selected")

        currency = (data.get("currency") or "").upper()
        if method == Donation.Method.STRIPE:
            if currency not in STRIPE_CURRENCIES:
                raise serializers.ValidationError("USD or EUR required for Stripe payments")
        elif not currency:
            currency = Donation.Currency.NGN
        elif currency not in Donation.Currency.values:
            raise serializers.ValidationError(f"Unsupported currency: {currency}")

        data["currency"] = currency
        data["phone"]    = data.get("phone") or None
        return data
