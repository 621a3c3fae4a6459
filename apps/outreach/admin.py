from django.contrib import admin
from .models import ContactMessage, PartnershipInquiry, WorkshopRegistration


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display    = ("name", "email", "subject", "notified", "created_at")
    list_filter     = ("notified",)
    search_fields   = ("name", "email", "subject")
    readonly_fields = ("created_at",)


@admin.register(PartnershipInquiry)
class PartnershipInquiryAdmin(admin.ModelAdmin):
    list_display    = ("org_name", "org_type", "contact_person", "contact_email", "notified", "created_at")
    list_filter     = ("org_type", "notified")
    search_fields   = ("org_name", "contact_person", "contact_email")
    readonly_fields = ("created_at",)


@admin.register(WorkshopRegistration)
class WorkshopRegistrationAdmin(admin.ModelAdmin):
    list_display    = ("full_name", "email", "phone", "workshop", "workflow_status", "workflow_attempts", "created_at")
    list_filter     = ("workflow_status", "workshop")
    search_fields   = ("full_name", "email", "phone")
    readonly_fields = ("payload", "workflow_attempts", "created_at")
    actions         = ["redeliver"]

    @admin.action(description="Re-send selected registrations to the workflow")
    def redeliver(self, request, queryset):
        from .tasks import deliver_registration
        for registration in queryset:
            deliver_registration.delay(registration.id)
        self.message_user(request, f"{queryset.count()} registration(s) queued for delivery.")
