"""Payment views: open a checkout, verify a reference, receive gateway webhooks."""

import logging

from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.donations.models import Donation
from apps.payments.gateways import OUTCOME_SUCCESS, get_gateway_adapter
from apps.payments.serializers import DonationIntentSerializer
from apps.payments.service import DonationService, WebhookReceiver

logger = logging.getLogger("carespring.payments")

gateway          = get_gateway_adapter()
donation_service = DonationService(gateway=gateway)
webhook_receiver = WebhookReceiver(gateway=gateway)


# ── POST /api/payment/initialize ─────────────────────────────────────────────
@extend_schema(
    tags=["Payments"],
    summary="Open a gateway checkout for a donation",
    request=DonationIntentSerializer,
    examples=[
        OpenApiExample(
            "Paystack (NGN)",
            value={"email": "ada@example.com", "donorName": "Ada Obi", "amount": "5000",
                   "currency": "NGN", "paymentMethod": "paystack"},
        ),
        OpenApiExample(
            "Stripe (USD)",
            value={"email": "ada@example.com", "donorName": "Ada Obi", "amount": "50",
                   "currency": "USD", "paymentMethod": "stripe"},
        ),
    ],
)
class PaymentInitializeView(APIView):
    permission_classes     = [AllowAny]
    authentication_classes = []

    def post(self, request):
        result = donation_service.initiate(request.data)
        return Response({
            "status":  "success",
            "message": result.pop("message"),
            "data":    result,
        })


# ── GET /api/payment/verify/<reference> ──────────────────────────────────────
@extend_schema(
    tags=["Payments"],
    summary="Verify how a payment reference settled",
    parameters=[
        OpenApiParameter("method", str, enum=Donation.Method.values,
                         description="Gateway that carried the payment (default paystack)"),
    ],
)
class PaymentVerifyView(APIView):
    permission_classes     = [AllowAny]
    authentication_classes = []

    def get(self, request, reference):
        method  = request.query_params.get("method") or Donation.Method.PAYSTACK
        outcome = donation_service.verify(reference, payment_method=method)
        settled = outcome["status"] == OUTCOME_SUCCESS

        return Response({
            "status":  "success",
            "message": "Payment verified successfully" if settled else "Payment was not successful",
            "data": {
                "reference": outcome["reference"],
                "status":    outcome["status"],
                "amount":    outcome["amount"],
                "currency":  outcome["currency"],
                "paid_at":   outcome["paid_at"],
                "customer":  outcome["customer"],
            },
        })


# ── POST /api/payment/webhook ────────────────────────────────────────────────
@extend_schema(
    tags=["Payments"],
    summary="Receive gateway charge.success / charge.failed events",
)
@method_decorator(csrf_exempt, name="dispatch")
class PaymentWebhookView(APIView):
    """
    Reads the raw body (the signature covers the exact bytes) and always
    acknowledges, except when production requires a signature that is absent.
    """
    permission_classes     = [AllowAny]
    authentication_classes = []   # webhooks are not JWT-authenticated
    throttle_classes       = []   # the gateway retries; never throttle it

    def post(self, request):
        signature = request.headers.get(WebhookReceiver.SIGNATURE_HEADER)
        return Response(webhook_receiver.handle(request.body, signature))
