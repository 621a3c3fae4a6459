"""
CareSpring Outreach Tests
==========================
Covers: contact form | partnership inquiry | workshop registration |
notification tasks | workflow retries | health check

Celery runs eagerly (see conftest); outbound HTTP is patched.

Run:
    pytest tests/test_outreach.py -v
"""

from unittest.mock import MagicMock, patch

import pytest
import requests
from kombu.exceptions import OperationalError
from rest_framework import status

from apps.outreach.models import ContactMessage, PartnershipInquiry, WorkshopRegistration
from apps.outreach.tasks import deliver_registration, notify_contact_message


def contact(**overrides):
    data = {
        "name":    "Ngozi Ade",
        "email":   "ngozi@example.com",
        "phone":   "+2348099999999",
        "subject": "Volunteering",
        "message": "How can I volunteer at the next outreach?",
    }
    data.update(overrides)
    return data


def partnership(**overrides):
    data = {
        "orgName":             "Lagos Health Trust",
        "orgType":             "NGO",
        "contactPerson":       "Tunde Bello",
        "contactEmail":        "tunde@lht.org",
        "contactPhone":        "+2348012340000",
        "partnershipInterest": "Sponsorship",
        "orgSize":             "50-100",
        "timeline":            "Q3",
    }
    data.update(overrides)
    return data


def registration(**overrides):
    data = {
        "fullName":     "Amaka Nwosu",
        "email":        "amaka@example.com",
        "phone":        "+2348011112222",
        "workshop":     "Basic First Aid",
        "organization": "St. Mary's School",
        "howHeard":     "Instagram",
    }
    data.update(overrides)
    return data


# ═══════════════════════════════════════════════════════════════════════════════
# INTEGRATION TESTS: Contact form
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestContactForm:

    def test_submission_stored_and_emailed(self, api_client, mailoutbox):
        resp = api_client.post("/api/contact", contact(), format="json")

        assert resp.status_code == status.HTTP_200_OK
        body = resp.json()
        assert body["status"] == "success"
        assert body["message"] == "Contact form submitted successfully! We'll get back to you soon."
        assert body["data"]["email"] == "ngozi@example.com"

        stored = ContactMessage.objects.get()
        assert stored.notified is True
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["inbox@carespring.test"]
        assert mailoutbox[0].subject == "New Contact Form Submission: Volunteering"
        assert "How can I volunteer" in mailoutbox[0].body

    def test_missing_fields_listed(self, api_client):
        resp = api_client.post("/api/contact", contact(email="", message="  "), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.json()["message"] == "Missing required fields: email, message"
        assert ContactMessage.objects.count() == 0

    def test_email_failure_does_not_fail_submission(self, api_client):
        with patch("apps.notifications.service.NotificationService.send_email", return_value=False) as send:
            resp = api_client.post("/api/contact", contact(), format="json")

        assert resp.status_code == status.HTTP_200_OK
        assert send.call_count == 4   # first attempt + 3 retries
        assert ContactMessage.objects.get().notified is False

    def test_broker_down_does_not_fail_submission(self, api_client):
        with patch("apps.outreach.views.notify_contact_message.delay", side_effect=OperationalError("no broker")):
            resp = api_client.post("/api/contact", contact(), format="json")
        assert resp.status_code == status.HTTP_200_OK
        assert ContactMessage.objects.count() == 1

    def test_missing_contact_is_logged_not_raised(self):
        assert notify_contact_message.apply(args=[424242]).successful()


# ═══════════════════════════════════════════════════════════════════════════════
# INTEGRATION TESTS: Partnership inquiry
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestPartnershipInquiry:

    def test_submission(self, api_client, mailoutbox):
        resp = api_client.post("/api/send-partnership-email", partnership(), format="json")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["message"] == (
            "Partnership inquiry submitted successfully! We'll contact you within 3-5 business days."
        )
        inquiry = PartnershipInquiry.objects.get()
        assert inquiry.org_name == "Lagos Health Trust"
        assert inquiry.partnership_interest == "Sponsorship"
        assert mailoutbox[0].subject == "New Partnership Request: Lagos Health Trust"
        assert "Contact Person: Tunde Bello" in mailoutbox[0].body

    def test_missing_fields_listed(self, api_client):
        data = partnership(orgType="", contactEmail=None, partnershipInterest="")
        resp = api_client.post("/api/send-partnership-email", data, format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.json()["message"] == (
            "Missing required fields: orgType, contactEmail, partnershipInterest"
        )

    def test_invalid_email(self, api_client):
        resp = api_client.post("/api/send-partnership-email", partnership(contactEmail="nope"), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.json()["message"].startswith("contactEmail:")


# ═══════════════════════════════════════════════════════════════════════════════
# INTEGRATION TESTS: Workshop registration
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestWorkshopRegistration:

    def test_development_skips_workflow(self, api_client):
        with patch("apps.outreach.views.deliver_registration") as task:
            resp = api_client.post("/api/register", registration(), format="json")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["message"] == "Registration successful! (Development mode)"
        task.delay.assert_not_called()
        stored = WorkshopRegistration.objects.get()
        assert stored.workflow_status == WorkshopRegistration.WorkflowStatus.PENDING
        assert stored.payload["howHeard"] == "Instagram"

    def test_production_queues_workflow(self, api_client, settings):
        settings.PRODUCTION = True
        with patch("apps.outreach.views.deliver_registration") as task:
            resp = api_client.post("/api/register", registration(), format="json")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["message"] == "Registration successful!"
        task.delay.assert_called_once_with(WorkshopRegistration.objects.get().id)

    def test_missing_fields_listed(self, api_client):
        resp = api_client.post("/api/register", registration(fullName="", phone=""), format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.json()["message"] == "Missing required fields: fullName, phone"

    def test_workflow_failure_never_reaches_the_user(self, api_client, settings):
        settings.PRODUCTION = True
        with patch("apps.notifications.service.requests.post",
                   side_effect=requests.ConnectionError("workflow down")):
            resp = api_client.post("/api/register", registration(), format="json")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["status"] == "success"
        stored = WorkshopRegistration.objects.get()
        assert stored.workflow_status == WorkshopRegistration.WorkflowStatus.FAILED


# ═══════════════════════════════════════════════════════════════════════════════
# UNIT TESTS: Registration workflow task
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestRegistrationWorkflowTask:

    def make_registration(self):
        return WorkshopRegistration.objects.create(
            full_name="Amaka Nwosu", email="amaka@example.com", phone="+2348011112222",
            payload=registration(),
        )

    @patch("apps.notifications.service.requests.post")
    def test_delivered(self, mock_post):
        mock_post.return_value = MagicMock(ok=True, status_code=200)
        reg = self.make_registration()

        deliver_registration.apply(args=[reg.id])

        reg.refresh_from_db()
        assert reg.workflow_status == WorkshopRegistration.WorkflowStatus.DELIVERED
        assert reg.workflow_attempts == 1
        assert mock_post.call_args.args[0] == "http://workflow-mock/webhook/registration"
        assert mock_post.call_args.kwargs["json"] == registration()

    @patch("apps.notifications.service.requests.post")
    def test_retried_then_delivered(self, mock_post):
        mock_post.side_effect = [
            MagicMock(ok=False, status_code=502, text="bad gateway"),
            MagicMock(ok=True, status_code=200),
        ]
        reg = self.make_registration()

        deliver_registration.apply(args=[reg.id])

        reg.refresh_from_db()
        assert reg.workflow_status == WorkshopRegistration.WorkflowStatus.DELIVERED
        assert reg.workflow_attempts == 2

    @patch("apps.notifications.service.requests.post")
    def test_failed_after_retries(self, mock_post):
        mock_post.return_value = MagicMock(ok=False, status_code=500, text="error")
        reg = self.make_registration()

        deliver_registration.apply(args=[reg.id])

        reg.refresh_from_db()
        assert reg.workflow_status == WorkshopRegistration.WorkflowStatus.FAILED
        assert reg.workflow_attempts == 4
        assert mock_post.call_count == 4


# ═══════════════════════════════════════════════════════════════════════════════
# INTEGRATION TESTS: Ops
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestHealth:

    def test_health(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == status.HTTP_200_OK
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["version"] == "test"
        assert body["environment"] == "test"
        assert body["checks"]["database"] == "ok"
        assert "timestamp" in body

    def test_openapi_schema(self, api_client):
        resp = api_client.get("/api/schema/")
        assert resp.status_code == status.HTTP_200_OK

    def test_swagger_ui(self, api_client):
        resp = api_client.get("/api/docs/")
        assert resp.status_code == status.HTTP_200_OK
        assert b"swagger" in resp.content.lower()
