"""
Error taxonomy + the DRF exception handler that renders every error
as {"status": "error", "message": ...}.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("carespring.errors")


class PaymentValidationError(APIException):
    """Missing or invalid request fields. Raised before any side effect."""
    status_code    = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code   = "invalid"


class GatewayError(APIException):
    """Third-party payment call failed or returned a non-success status."""
    status_code    = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Payment gateway request failed. Please try again."
    default_code   = "gateway_error"


class NotFoundError(APIException):
    status_code    = status.HTTP_404_NOT_FOUND
    default_detail = "Record not found."
    default_code   = "not_found"


class SignatureMissing(APIException):
    status_code    = status.HTTP_400_BAD_REQUEST
    default_detail = "No signature provided"
    default_code   = "signature_missing"


def first_message(detail):
    if isinstance(detail, dict):
        if "non_field_errors" in detail:
            return first_message(detail["non_field_errors"])
        for field, value in detail.items():
            return f"{field}: {first_message(value)}"
        return ""
    if isinstance(detail, (list, tuple)):
        return first_message(detail[0]) if detail else ""
    return str(detail)


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, DatabaseError):
            logger.error("Record store error in %s: %s", context.get("view").__class__.__name__, exc)
            return Response(
                {"status": "error", "message": "Internal error. Please try again."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return None

    detail = response.data
    # {"detail": ...} (plus simplejwt's "code"/"messages") carries one message, not field errors
    if isinstance(detail, dict) and "detail" in detail:
        detail = detail["detail"]

    body = {"status": "error", "message": first_message(detail)}
    if isinstance(detail, dict):
        body["errors"] = detail
    response.data = body
    return response
