"""
Payment gateway adapters.
MockGatewayAdapter builds checkout URLs and settlement reports locally,
with no network access and no secrets. LiveGatewayAdapter calls the real
Paystack REST API and the Stripe SDK.

The adapter is chosen once, from settings, by get_gateway_adapter().
"""

import hashlib
import hmac
import logging
import secrets
import string
import time
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from urllib.parse import urlencode

import requests
import stripe
from django.conf import settings
from django.utils.dateparse import parse_datetime

from apps.donations.models import Donation
from carespring.exceptions import GatewayError, NotFoundError

logger = logging.getLogger("carespring.payments")

REFERENCE_PREFIX = "UDK"
BASE36           = string.digits + string.ascii_lowercase
MINOR_UNITS      = 100   # kobo per naira, cents per dollar/euro

OUTCOME_SUCCESS = "success"
OUTCOME_FAILED  = "failed"


def generate_reference() -> str:
    """UDK-<epoch millis>-<9 random base36 chars>. Collisions are negligible."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(BASE36) for _ in range(9))
    return f"{REFERENCE_PREFIX}-{millis}-{suffix}"


def to_minor_units(amount) -> int:
    return int((Decimal(str(amount)) * MINOR_UNITS).to_integral_value())


def from_minor_units(value) -> Decimal:
    try:
        return (Decimal(str(value or 0)) / MINOR_UNITS).quantize(Decimal("0.01"))
    except InvalidOperation:
        return Decimal("0.00")


def parse_paid_at(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return parse_datetime(str(value))


# ── Gateway Adapter Interface ──────────────────────────────────────────────────
class PaymentGatewayAdapter:
    """
    Abstract base: every gateway implements this interface.

    create_session(intent)         -> {"reference", "access_url", "message"}
    resolve(reference, method)     -> {"reference", "status", "amount", "currency",
                                       "paid_at", "customer", "payment_method"}
    verify_signature(payload, sig) -> bool
    """

    # Live gateways refuse to open a checkout without an amount
    requires_amount = False

    def create_session(self, intent: dict) -> dict:
        raise NotImplementedError

    def resolve(self, reference: str, payment_method: str = Donation.Method.PAYSTACK) -> dict:
        raise NotImplementedError

    def verify_signature(self, payload: bytes, signature: str) -> bool:
        raise NotImplementedError


# ── Mock ───────────────────────────────────────────────────────────────────────
class MockGatewayAdapter(PaymentGatewayAdapter):
    """
    Development gateway. Every reference it is asked about settles
    successfully, with a fixed amount and customer, so the donate page
    can be exercised end to end without keys.

    resolve() is a pure function of the reference: paid_at comes from the
    timestamp embedded in it, so repeated verification returns the same
    outcome.
    """

    CHECKOUT_URLS = {
        Donation.Method.PAYSTACK:  "https://checkout.paystack.co",
        Donation.Method.GOOGLEPAY: "https://pay.google.com/gpay",
        Donation.Method.STRIPE:    "https://checkout.stripe.com/pay",
    }
    MESSAGES = {
        Donation.Method.PAYSTACK:  "Paystack checkout initialized - Development mode",
        Donation.Method.GOOGLEPAY: "Google Pay checkout initialized - Development mode",
        Donation.Method.STRIPE:    "Stripe checkout initialized ({currency}) - Development mode",
    }
    SETTLED_AMOUNT   = Decimal("5000")
    SETTLED_CUSTOMER = {"email": "test@example.com", "name": "Test Donor"}

    def create_session(self, intent: dict) -> dict:
        method    = intent["payment_method"]
        reference = intent["reference"]
        query     = urlencode({
            "currency": intent["currency"],
            "email":    intent["email"],
            "name":     intent["donor_name"],
        })

        logger.info("MOCK GATEWAY: %s checkout for %s (%s)", method, reference, intent["currency"])

        return {
            "reference":  reference,
            "access_url": f"{self.CHECKOUT_URLS[method]}/{reference}?{query}",
            "message":    self.MESSAGES[method].format(currency=intent["currency"]),
        }

    def resolve(self, reference: str, payment_method: str = Donation.Method.PAYSTACK) -> dict:
        currency = Donation.Currency.USD if payment_method == Donation.Method.STRIPE else Donation.Currency.NGN
        return {
            "reference":      reference,
            "status":         OUTCOME_SUCCESS,
            "amount":         self.SETTLED_AMOUNT,
            "currency":       currency,
            "paid_at":        self._paid_at(reference),
            "customer":       dict(self.SETTLED_CUSTOMER),
            "payment_method": payment_method,
        }

    def verify_signature(self, payload: bytes, signature: str) -> bool:
        return True   # no secret to check against in mock mode

    @staticmethod
    def _paid_at(reference: str) -> datetime:
        try:
            millis = int(reference.split("-")[1])
        except (IndexError, ValueError):
            millis = 0
        return datetime.fromtimestamp(millis / 1000, tz=dt_timezone.utc)


# ── Live: Paystack (REST) + Stripe (SDK) ──────────────────────────────────────
class LiveGatewayAdapter(PaymentGatewayAdapter):
    """
    Paystack carries both "paystack" and "googlepay" donations;
    Stripe carries "stripe" donations in USD/EUR.

    Failures surface as GatewayError with a generic message. Secrets
    never reach logs or responses.
    """

    requires_amount = True

    def __init__(self, paystack_secret=None, stripe_secret=None, webhook_secret=None,
                 base_url=None, callback_url=None, timeout=None):
        self.paystack_secret = paystack_secret or settings.PAYSTACK_SECRET_KEY
        self.stripe_secret   = stripe_secret   or settings.STRIPE_SECRET_KEY
        self.webhook_secret  = webhook_secret  or settings.PAYSTACK_WEBHOOK_SECRET or self.paystack_secret
        self.base_url        = (base_url or settings.PAYSTACK_BASE_URL).rstrip("/")
        self.callback_url    = callback_url or settings.PAYMENT_CALLBACK_URL
        self.timeout         = timeout or settings.PAYMENT_TIMEOUT

    # ── Checkout ──────────────────────────────────────────────────────────────
    def create_session(self, intent: dict) -> dict:
        if intent["payment_method"] == Donation.Method.STRIPE:
            return self._stripe_checkout(intent)
        return self._paystack_checkout(intent)

    def _paystack_checkout(self, intent: dict) -> dict:
        data = self._paystack("POST", "/transaction/initialize", json={
            "email":        intent["email"],
            "amount":       to_minor_units(intent["amount"]),
            "currency":     intent["currency"],
            "reference":    intent["reference"],
            "callback_url": self.callback_url,
            "metadata":     {
                "donorName":     intent["donor_name"],
                "phone":         intent.get("phone") or "",
                "paymentMethod": intent["payment_method"],
            },
        })
        logger.info("Paystack checkout opened for %s", intent["reference"])
        return {
            "reference":  data.get("reference") or intent["reference"],
            "access_url": data.get("authorization_url"),
            "message":    "Payment initialized successfully",
        }

    def _stripe_checkout(self, intent: dict) -> dict:
        reference = intent["reference"]
        metadata  = {
            "reference":     reference,
            "donorName":     intent["donor_name"],
            "paymentMethod": Donation.Method.STRIPE,
        }
        try:
            session = stripe.checkout.Session.create(
                api_key=self.stripe_secret,
                mode="payment",
                customer_email=intent["email"],
                client_reference_id=reference,
                line_items=[{
                    "quantity":   1,
                    "price_data": {
                        "currency":     intent["currency"].lower(),
                        "unit_amount":  to_minor_units(intent["amount"]),
                        "product_data": {"name": "Donation to CareSpring Foundation"},
                    },
                }],
                metadata=metadata,
                payment_intent_data={"metadata": metadata},
                success_url=f"{self.callback_url}?{urlencode({'reference': reference, 'method': 'stripe'})}",
                cancel_url=f"{self.callback_url}?{urlencode({'cancelled': reference})}",
            )
        except stripe.StripeError as exc:
            logger.error("Stripe checkout failed for %s: %s", reference, exc.__class__.__name__)
            raise GatewayError() from exc

        logger.info("Stripe checkout opened for %s", reference)
        return {
            "reference":  reference,
            "access_url": session.url,
            "message":    f"Stripe checkout initialized ({intent['currency']})",
        }

    # ── Settlement ────────────────────────────────────────────────────────────
    def resolve(self, reference: str, payment_method: str = Donation.Method.PAYSTACK) -> dict:
        if payment_method == Donation.Method.STRIPE:
            return self._stripe_resolve(reference)
        return self._paystack_resolve(reference, payment_method)

    def _paystack_resolve(self, reference: str, payment_method: str) -> dict:
        data     = self._paystack("GET", f"/transaction/verify/{reference}")
        customer = data.get("customer") or {}
        metadata = data.get("metadata") if isinstance(data.get("metadata"), dict) else {}
        name     = metadata.get("donorName") or " ".join(
            part for part in (customer.get("first_name"), customer.get("last_name")) if part
        )
        settled  = data.get("status") == "success"
        return {
            "reference":      data.get("reference") or reference,
            "status":         OUTCOME_SUCCESS if settled else OUTCOME_FAILED,
            "amount":         from_minor_units(data.get("amount")),
            "currency":       data.get("currency") or Donation.Currency.NGN,
            "paid_at":        parse_paid_at(data.get("paid_at") or data.get("paidAt")),
            "customer":       {"email": customer.get("email"), "name": name or None},
            "payment_method": metadata.get("paymentMethod") or payment_method,
        }

    def _stripe_resolve(self, reference: str) -> dict:
        try:
            found = stripe.PaymentIntent.search(
                api_key=self.stripe_secret,
                query=f"metadata['reference']:'{reference}'",
                limit=1,
            )
        except stripe.StripeError as exc:
            logger.error("Stripe lookup failed for %s: %s", reference, exc.__class__.__name__)
            raise GatewayError() from exc

        if not found.data:
            raise NotFoundError(f"Payment reference {reference} not found")

        intent   = found.data[0]
        metadata = dict(intent.metadata or {})
        settled  = intent.status == "succeeded"
        return {
            "reference":      reference,
            "status":         OUTCOME_SUCCESS if settled else OUTCOME_FAILED,
            "amount":         from_minor_units(intent.amount_received or intent.amount),
            "currency":       (intent.currency or "usd").upper(),
            "paid_at":        datetime.fromtimestamp(intent.created, tz=dt_timezone.utc) if settled else None,
            "customer":       {"email": intent.receipt_email, "name": metadata.get("donorName")},
            "payment_method": Donation.Method.STRIPE,
        }

    # ── Webhooks ──────────────────────────────────────────────────────────────
    def verify_signature(self, payload: bytes, signature: str) -> bool:
        """Paystack signs the raw body with HMAC-SHA512 of the secret key."""
        if not signature or not self.webhook_secret:
            return False
        expected = hmac.new(self.webhook_secret.encode(), payload, hashlib.sha512).hexdigest()
        return hmac.compare_digest(expected, signature)

    # ── Transport ─────────────────────────────────────────────────────────────
    def _paystack(self, method: str, path: str, **kwargs) -> dict:
        try:
            resp = requests.request(
                method,
                f"{self.base_url}{path}",
                headers={"Authorization": f"Bearer {self.paystack_secret}"},
                timeout=self.timeout,
                **kwargs,
            )
            body = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Paystack %s %s failed: %s", method, path, exc.__class__.__name__)
            raise GatewayError() from exc

        if resp.status_code >= 400 or not body.get("status"):
            message = str(body.get("message") or "")
            logger.error("Paystack %s %s returned %s: %s", method, path, resp.status_code, message)
            if "not found" in message.lower():
                raise NotFoundError(message)
            raise GatewayError()
        return body.get("data") or {}


# ── Factory ────────────────────────────────────────────────────────────────────
def get_gateway_adapter() -> PaymentGatewayAdapter:
    if not settings.PRODUCTION or settings.MOCK_PAYMENT:
        logger.info("Payment gateway: mock (env=%s)", settings.APP_ENV)
        return MockGatewayAdapter()
    logger.info("Payment gateway: live")
    return LiveGatewayAdapter()
