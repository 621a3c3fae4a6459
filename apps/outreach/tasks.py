"""Celery tasks for outreach submissions: staff emails and the registration workflow."""

import logging
from celery import shared_task
from django.conf import settings

logger = logging.getLogger("carespring.outreach.tasks")


def contact_email(contact) -> tuple:
    subject = f"New Contact Form Submission: {contact.subject or 'Website Inquiry'}"
    body = (
        f"Name: {contact.name}\n"
        f"Email: {contact.email}\n"
        f"Phone: {contact.phone or 'Not provided'}\n"
        f"Subject: {contact.subject or 'No subject'}\n"
        f"\n"
        f"Message:\n{contact.message}\n"
        f"\n"
        f"Submitted at: {contact.created_at.isoformat()}\n"
    )
    return subject, body


def partnership_email(inquiry) -> tuple:
    subject = f"New Partnership Request: {inquiry.org_name}"
    body = (
        f"Organization: {inquiry.org_name}\n"
        f"Type: {inquiry.org_type}\n"
        f"Contact Person: {inquiry.contact_person}\n"
        f"Email: {inquiry.contact_email}\n"
        f"Phone: {inquiry.contact_phone or 'Not provided'}\n"
        f"Partnership Interest: {inquiry.partnership_interest}\n"
        f"Organization Size: {inquiry.org_size or '-'}\n"
        f"Goals: {inquiry.partnership_goals or '-'}\n"
        f"Resources: {inquiry.available_resources or '-'}\n"
        f"Timeline: {inquiry.timeline or '-'}\n"
        f"Additional Info: {inquiry.additional_info or '-'}\n"
        f"Submitted: {inquiry.created_at.isoformat()}\n"
    )
    return subject, body


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_contact_message(self, contact_id: int):
    """Email a new contact message to the foundation inbox."""
    from apps.outreach.models import ContactMessage
    from apps.notifications.service import NotificationService

    try:
        contact = ContactMessage.objects.get(id=contact_id)
    except ContactMessage.DoesNotExist:
        logger.error("Contact message %s not found for notification", contact_id)
        return

    subject, body = contact_email(contact)
    if NotificationService().send_email(settings.CONTACT_EMAIL, subject, body):
        contact.notified = True
        contact.save(update_fields=["notified"])
        return

    if self.request.retries >= self.max_retries:
        logger.error("Giving up on contact notification %s", contact_id)
        return
    raise self.retry()


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_partnership_inquiry(self, inquiry_id: int):
    """Email a new partnership inquiry to the foundation inbox."""
    from apps.outreach.models import PartnershipInquiry
    from apps.notifications.service import NotificationService

    try:
        inquiry = PartnershipInquiry.objects.get(id=inquiry_id)
    except PartnershipInquiry.DoesNotExist:
        logger.error("Partnership inquiry %s not found for notification", inquiry_id)
        return

    subject, body = partnership_email(inquiry)
    if NotificationService().send_email(settings.CONTACT_EMAIL, subject, body):
        inquiry.notified = True
        inquiry.save(update_fields=["notified"])
        return

    if self.request.retries >= self.max_retries:
        logger.error("Giving up on partnership notification %s", inquiry_id)
        return
    raise self.retry()


@shared_task(bind=True, max_retries=3, default_retry_delay=30)
def deliver_registration(self, registration_id: int):
    """
    Forward a workshop registration to the registration workflow.
    workflow_status records the outcome: delivered, or failed once the
    retries are used up. The registration itself is never touched otherwise.
    """
    from apps.outreach.models import WorkshopRegistration
    from apps.notifications.service import NotificationService

    try:
        registration = WorkshopRegistration.objects.get(id=registration_id)
    except WorkshopRegistration.DoesNotExist:
        logger.error("Registration %s not found for workflow delivery", registration_id)
        return

    delivered = NotificationService().post_workflow(
        settings.REGISTRATION_WEBHOOK_URL, registration.payload,
    )
    registration.workflow_attempts += 1

    if delivered:
        registration.workflow_status = WorkshopRegistration.WorkflowStatus.DELIVERED
        registration.save(update_fields=["workflow_status", "workflow_attempts"])
        logger.info("Registration %s delivered to workflow", registration_id)
        return

    if self.request.retries >= self.max_retries:
        registration.workflow_status = WorkshopRegistration.WorkflowStatus.FAILED
        registration.save(update_fields=["workflow_status", "workflow_attempts"])
        logger.error("Registration %s not delivered after %d attempts",
                     registration_id, registration.workflow_attempts)
        return

    registration.save(update_fields=["workflow_attempts"])
    raise self.retry()
