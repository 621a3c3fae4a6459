from django.contrib import admin
from .models import Donation


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display    = ("reference", "donor_name", "donor_email", "amount", "currency",
                       "payment_method", "payment_status", "paid_at", "created_at")
    list_filter     = ("payment_status", "payment_method", "currency")
    search_fields   = ("reference", "donor_name", "donor_email")
    readonly_fields = ("created_at", "updated_at")
