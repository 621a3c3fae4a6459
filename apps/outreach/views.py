"""
Public outreach forms: contact, partnership inquiry, workshop registration.
A submission succeeds once it is stored. Notifications are queued
afterwards and cannot turn a stored submission into an error.
"""

import logging

from django.conf import settings
from drf_spectacular.utils import extend_schema
from kombu.exceptions import OperationalError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from . import serializers as sz
from .tasks import deliver_registration, notify_contact_message, notify_partnership_inquiry

logger = logging.getLogger("carespring.outreach")


def enqueue(task, *args):
    """Queue a follow-up task; an unreachable broker is logged, not raised."""
    try:
        task.delay(*args)
    except OperationalError as exc:
        logger.error("Could not queue %s%s: %s", task.name, args, exc)


class PublicFormView(APIView):
    permission_classes     = [AllowAny]
    authentication_classes = []


# ── POST /api/contact ─────────────────────────────────────────────────────────
@extend_schema(tags=["Outreach"], summary="Submit the contact form",
               request=sz.ContactMessageSerializer, responses=sz.ContactMessageSerializer)
class ContactView(PublicFormView):

    def post(self, request):
        ser = sz.ContactMessageSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        contact = ser.save()
        logger.info("Contact message %s from %s", contact.id, contact.email)

        enqueue(notify_contact_message, contact.id)
        return Response({
            "status":  "success",
            "message": "Contact form submitted successfully! We'll get back to you soon.",
            "data":    sz.ContactMessageSerializer(contact).data,
        })


# ── POST /api/send-partnership-email ──────────────────────────────────────────
@extend_schema(tags=["Outreach"], summary="Submit a partnership inquiry",
               request=sz.PartnershipInquirySerializer, responses=sz.PartnershipInquirySerializer)
class PartnershipInquiryView(PublicFormView):

    def post(self, request):
        ser = sz.PartnershipInquirySerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        inquiry = ser.save()
        logger.info("Partnership inquiry %s from %s", inquiry.id, inquiry.org_name)

        enqueue(notify_partnership_inquiry, inquiry.id)
        return Response({
            "status":  "success",
            "message": "Partnership inquiry submitted successfully! "
                       "We'll contact you within 3-5 business days.",
            "data":    sz.PartnershipInquirySerializer(inquiry).data,
        })


# ── POST /api/register ────────────────────────────────────────────────────────
@extend_schema(tags=["Outreach"], summary="Register for a first-aid workshop",
               request=sz.WorkshopRegistrationSerializer, responses=sz.WorkshopRegistrationSerializer)
class WorkshopRegistrationView(PublicFormView):

    def post(self, request):
        ser = sz.WorkshopRegistrationSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        registration = ser.save()
        logger.info("Workshop registration %s for %s", registration.id, registration.email)

        if settings.PRODUCTION:
            enqueue(deliver_registration, registration.id)
            message = "Registration successful!"
        else:
            logger.info("Development mode: registration workflow skipped")
            message = "Registration successful! (Development mode)"

        return Response({
            "status":  "success",
            "message": message,
            "data":    sz.WorkshopRegistrationSerializer(registration).data,
        })
