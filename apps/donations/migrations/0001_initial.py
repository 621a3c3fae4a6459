from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Donation",
            fields=[
                ("id",             models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reference",      models.CharField(max_length=64, unique=True)),
                ("donor_name",     models.CharField(blank=True, max_length=120, null=True)),
                ("donor_email",    models.EmailField(blank=True, max_length=254, null=True)),
                ("phone",          models.CharField(blank=True, max_length=30, null=True)),
                ("amount",         models.DecimalField(
                    decimal_places=2, default=Decimal("0.00"), max_digits=12,
                    validators=[django.core.validators.MinValueValidator(0)],
                )),
                ("currency",       models.CharField(
                    choices=[("NGN", "Naira"), ("USD", "US Dollar"), ("EUR", "Euro")],
                    default="NGN",
                    max_length=3,
                )),
                ("payment_method", models.CharField(
                    choices=[("paystack", "Paystack"), ("googlepay", "Google Pay"), ("stripe", "Stripe")],
                    default="paystack",
                    max_length=10,
                )),
                ("payment_status", models.CharField(
                    choices=[("pending", "Pending"), ("successful", "Successful"), ("failed", "Failed")],
                    default="pending",
                    max_length=10,
                )),
                ("paid_at",        models.DateTimeField(blank=True, null=True)),
                ("created_at",     models.DateTimeField(auto_now_add=True)),
                ("updated_at",     models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="donation",
            index=models.Index(fields=["payment_status"], name="don_status_idx"),
        ),
        migrations.AddIndex(
            model_name="donation",
            index=models.Index(fields=["created_at"], name="don_created_idx"),
        ),
    ]
