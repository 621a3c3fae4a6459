"""
Donation record: the persisted side of a gateway interaction.
Rows are keyed by the locally generated payment reference so that
verification and webhook callbacks upsert instead of appending.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Donation(models.Model):
    class Method(models.TextChoices):
        PAYSTACK  = "paystack",  "Paystack"
        GOOGLEPAY = "googlepay", "Google Pay"
        STRIPE    = "stripe",    "Stripe"

    class Currency(models.TextChoices):
        NGN = "NGN", "Naira"
        USD = "USD", "US Dollar"
        EUR = "EUR", "Euro"

    class Status(models.TextChoices):
        PENDING    = "pending",    "Pending"
        SUCCESSFUL = "successful", "Successful"
        FAILED     = "failed",     "Failed"

    reference      = models.CharField(max_length=64, unique=True)
    donor_name     = models.CharField(max_length=120, blank=True, null=True)
    donor_email    = models.EmailField(blank=True, null=True)
    phone          = models.CharField(max_length=30, blank=True, null=True)
    # Human-facing unit (naira, dollars); gateways get minor units
    amount         = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"),
                                         validators=[MinValueValidator(0)])
    currency       = models.CharField(max_length=3, choices=Currency.choices, default=Currency.NGN)
    payment_method = models.CharField(max_length=10, choices=Method.choices, default=Method.PAYSTACK)
    payment_status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    paid_at        = models.DateTimeField(null=True, blank=True)
    created_at     = models.DateTimeField(auto_now_add=True)
    updated_at     = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes  = [
            models.Index(fields=["payment_status"], name="don_status_idx"),
            models.Index(fields=["created_at"], name="don_created_idx"),
        ]

    def __str__(self):
        return f"{self.reference} – {self.payment_status} ({self.amount} {self.currency})"
