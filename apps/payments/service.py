"""
Donation payment flow.

DonationService: validate an intent, open a gateway checkout, and
                 verify a reference (mirroring the outcome into the store).
WebhookReceiver: apply gateway push notifications to the store and
                 always acknowledge them.

Both take their gateway and store as constructor arguments; the
defaults are the configured adapter and the Django-backed store.
"""

import json
import logging

from django.conf import settings
from django.db import DatabaseError

from apps.donations.models import Donation
from apps.donations.store import DonationStore
from apps.payments.gateways import (
    OUTCOME_SUCCESS, from_minor_units, generate_reference, get_gateway_adapter, parse_paid_at,
)
from apps.payments.serializers import DonationIntentSerializer
from carespring.exceptions import (
    GatewayError, NotFoundError, SignatureMissing, PaymentValidationError, first_message,
)

logger = logging.getLogger("carespring.payments")


class DonationService:

    INLINE_MESSAGE = "Donation received. Thank you for supporting CareSpring Foundation!"

    def __init__(self, gateway=None, store=None):
        self.gateway = gateway or get_gateway_adapter()
        self.store   = store or DonationStore()

    # ── Initiate ──────────────────────────────────────────────────────────────
    def initiate(self, data) -> dict:
        """
        Validate `data` and open a checkout session.
        Nothing is written to the store here: the amount and status enter
        the store when the payment settles (verify or webhook).
        """
        ser = DonationIntentSerializer(data=data)
        if not ser.is_valid():
            raise PaymentValidationError(first_message(ser.errors))

        intent = dict(ser.validated_data)
        if self.gateway.requires_amount and not intent.get("amount"):
            raise PaymentValidationError("Donation amount is required")

        intent["reference"] = generate_reference()

        try:
            session = self.gateway.create_session(intent)
        except (GatewayError, NotFoundError):
            raise
        except Exception as exc:
            logger.error("Checkout failed for %s: %s", intent["reference"], exc.__class__.__name__)
            raise GatewayError() from exc

        reference  = session.get("reference") or intent["reference"]
        access_url = session.get("access_url")
        if access_url:
            message = session.get("message") or "Payment initialized successfully"
        else:
            # no redirect: the donor is confirmed inline
            message = self.INLINE_MESSAGE

        logger.info(
            "Checkout opened: ref=%s method=%s currency=%s redirect=%s",
            reference, intent["payment_method"], intent["currency"], bool(access_url),
        )
        return {
            "reference":     reference,
            "access_url":    access_url,
            "email":         intent["email"],
            "donorName":     intent["donor_name"],
            "paymentMethod": intent["payment_method"],
            "currency":      intent["currency"],
            "message":       message,
        }

    # ── Verify ────────────────────────────────────────────────────────────────
    def verify(self, reference: str, payment_method: str = Donation.Method.PAYSTACK) -> dict:
        """
        Ask the gateway how `reference` settled. A non-success settlement is
        returned as a "failed" outcome, not raised. Either way the outcome
        is mirrored into the store; a store failure there is logged only.
        """
        reference = (reference or "").strip()
        if not reference:
            raise PaymentValidationError("Payment reference is required")
        if payment_method not in Donation.Method.values:
            raise PaymentValidationError("Invalid payment method selected")

        try:
            outcome = self.gateway.resolve(reference, payment_method=payment_method)
        except (GatewayError, NotFoundError):
            raise
        except Exception as exc:
            logger.error("Verification failed for %s: %s", reference, exc.__class__.__name__)
            raise GatewayError() from exc

        self._mirror(outcome)
        logger.info("Verified %s → %s", outcome["reference"], outcome["status"])
        return outcome

    def _mirror(self, outcome: dict) -> None:
        customer = outcome.get("customer") or {}
        settled  = outcome["status"] == OUTCOME_SUCCESS
        try:
            self.store.upsert_by_reference(
                outcome["reference"],
                Donation.Status.SUCCESSFUL if settled else Donation.Status.FAILED,
                amount         = outcome.get("amount"),
                currency       = outcome.get("currency"),
                paid_at        = outcome.get("paid_at"),
                donor_email    = customer.get("email"),
                donor_name     = customer.get("name"),
                payment_method = outcome.get("payment_method"),
            )
        except DatabaseError as exc:
            logger.error("Could not record verification of %s: %s", outcome["reference"], exc)


class WebhookReceiver:
    """
    Applies charge.success / charge.failed events.

    The sender retries anything that is not acknowledged, so handle()
    acknowledges every delivery that gets past the signature gate, even
    when processing fails. Upserting on the reference keeps redelivered
    events from creating extra rows.
    """

    SIGNATURE_HEADER = "x-paystack-signature"

    def __init__(self, gateway=None, store=None, production=None):
        self.gateway    = gateway or get_gateway_adapter()
        self.store      = store or DonationStore()
        self.production = settings.PRODUCTION if production is None else production
        self.handlers   = {
            "charge.success": self._charge_success,
            "charge.failed":  self._charge_failed,
        }

    def handle(self, payload: bytes, signature) -> dict:
        if self.production and not signature:
            logger.warning("Webhook rejected: no signature")
            raise SignatureMissing()

        try:
            self._process(payload, signature)
        except Exception:
            logger.exception("Webhook processing failed; acknowledging anyway")

        return {"received": True}

    def _process(self, payload: bytes, signature) -> None:
        if signature and not self.gateway.verify_signature(payload, signature):
            logger.warning("Webhook ignored: invalid signature")
            return

        event = json.loads(payload or b"{}")
        kind  = event.get("event")
        data  = event.get("data") or {}

        handler = self.handlers.get(kind)
        if handler is None:
            logger.info("Webhook event %s ignored", kind)
            return
        handler(data)

    def _charge_success(self, data: dict) -> None:
        self._apply(data, Donation.Status.SUCCESSFUL)

    def _charge_failed(self, data: dict) -> None:
        self._apply(data, Donation.Status.FAILED)

    def _apply(self, data: dict, payment_status: str) -> None:
        reference = data.get("reference")
        if not reference:
            logger.warning("Webhook event without reference ignored")
            return

        customer = data.get("customer") or {}
        metadata = data.get("metadata") if isinstance(data.get("metadata"), dict) else {}
        paid_at  = parse_paid_at(data.get("paid_at")) if payment_status == Donation.Status.SUCCESSFUL else None

        self.store.upsert_by_reference(
            reference,
            payment_status,
            amount         = from_minor_units(data["amount"]) if data.get("amount") is not None else None,
            currency       = data.get("currency"),
            paid_at        = paid_at,
            donor_email    = customer.get("email"),
            donor_name     = metadata.get("donorName"),
            phone          = metadata.get("phone") or None,
            payment_method = metadata.get("paymentMethod"),
        )
