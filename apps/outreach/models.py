"""
Outreach submissions from the public site: contact messages, partnership
inquiries and first-aid workshop registrations.
The stored row is the record of the submission; notifications about it
are sent afterwards by Celery tasks.
"""

from django.db import models


class ContactMessage(models.Model):
    name       = models.CharField(max_length=120)
    email      = models.EmailField()
    phone      = models.CharField(max_length=30, blank=True)
    subject    = models.CharField(max_length=200, blank=True)
    message    = models.TextField()
    notified   = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} <{self.email}> – {self.subject or 'No subject'}"


class PartnershipInquiry(models.Model):
    org_name             = models.CharField(max_length=200)
    org_type             = models.CharField(max_length=100)
    org_size             = models.CharField(max_length=50, blank=True)
    contact_person       = models.CharField(max_length=120)
    contact_email        = models.EmailField()
    contact_phone        = models.CharField(max_length=30, blank=True)
    partnership_interest = models.CharField(max_length=200)
    partnership_goals    = models.TextField(blank=True)
    available_resources  = models.TextField(blank=True)
    timeline             = models.CharField(max_length=100, blank=True)
    additional_info      = models.TextField(blank=True)
    notified             = models.BooleanField(default=False)
    created_at           = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering            = ["-created_at"]
        verbose_name_plural = "partnership inquiries"

    def __str__(self):
        return f"{self.org_name} ({self.org_type}) – {self.contact_person}"


class WorkshopRegistration(models.Model):
    class WorkflowStatus(models.TextChoices):
        PENDING   = "pending",   "Pending"
        DELIVERED = "delivered", "Delivered"
        FAILED    = "failed",    "Failed"

    full_name         = models.CharField(max_length=120)
    email             = models.EmailField()
    phone             = models.CharField(max_length=30)
    workshop          = models.CharField(max_length=200, blank=True)
    organization      = models.CharField(max_length=200, blank=True)
    message           = models.TextField(blank=True)
    # Submission exactly as received; forwarded unchanged to the workflow
    payload           = models.JSONField(default=dict, blank=True)
    workflow_status   = models.CharField(max_length=10, choices=WorkflowStatus.choices,
                                         default=WorkflowStatus.PENDING)
    workflow_attempts = models.PositiveSmallIntegerField(default=0)
    created_at        = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes  = [models.Index(fields=["workflow_status"], name="reg_workflow_idx")]

    def __str__(self):
        return f"{self.full_name} – {self.workshop or 'workshop'} ({self.workflow_status})"
