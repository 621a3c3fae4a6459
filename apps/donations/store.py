"""
DonationStore: the only code that touches the Donation table.
Injected into DonationService, WebhookReceiver and the donation views so
tests can swap in a double or a store that fails.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Avg, Count, Sum
from django.utils import timezone

from apps.donations.models import Donation
from carespring.exceptions import NotFoundError

logger = logging.getLogger("carespring.donations")


class DonationStore:

    def all(self):
        return Donation.objects.all()

    def get(self, pk) -> Donation:
        try:
            return Donation.objects.get(pk=pk)
        except Donation.DoesNotExist:
            raise NotFoundError(f"Donation {pk} not found")

    def get_by_reference(self, reference: str):
        return Donation.objects.filter(reference=reference).first()

    def insert(self, **fields) -> Donation:
        donation = Donation.objects.create(**fields)
        logger.info("Donation %s recorded (%s)", donation.reference, donation.payment_status)
        return donation

    def update_status(self, pk, payment_status: str) -> Donation:
        donation = self.get(pk)
        donation.payment_status = payment_status
        if payment_status == Donation.Status.SUCCESSFUL and donation.paid_at is None:
            donation.paid_at = timezone.now()
        donation.save(update_fields=["payment_status", "paid_at", "updated_at"])
        logger.info("Donation %s status → %s", donation.reference, payment_status)
        return donation

    def delete(self, pk) -> None:
        donation = self.get(pk)
        donation.delete()
        logger.info("Donation %s deleted", donation.reference)

    def upsert_by_reference(self, reference: str, payment_status: str, **fields):
        """
        Create or update the single row for `reference`.
        None values never overwrite stored data, so a sparse report
        (e.g. a failed charge without customer details) keeps what is known.
        A settled donation is never demoted to failed by a late report.
        """
        defaults = {key: value for key, value in fields.items() if value is not None}
        defaults["payment_status"] = payment_status

        with transaction.atomic():
            current = Donation.objects.select_for_update().filter(reference=reference).first()
            if (current is not None
                    and current.payment_status == Donation.Status.SUCCESSFUL
                    and payment_status == Donation.Status.FAILED):
                logger.warning("Donation %s already successful; late failure report ignored", reference)
                return current, False
            donation, created = Donation.objects.update_or_create(reference=reference, defaults=defaults)

        logger.info(
            "Donation %s %s (%s)", reference, "created" if created else "updated", payment_status,
        )
        return donation, created

    def stats(self) -> dict:
        donations   = Donation.objects.order_by()
        successful  = donations.filter(payment_status=Donation.Status.SUCCESSFUL)
        by_status   = dict(donations.values_list("payment_status").annotate(n=Count("id")))
        totals      = successful.aggregate(total=Sum("amount"), average=Avg("amount"))

        month_start = timezone.now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        this_month  = donations.filter(created_at__gte=month_start)
        month_total = this_month.filter(payment_status=Donation.Status.SUCCESSFUL).aggregate(total=Sum("amount"))

        average = totals["average"] or 0
        return {
            "totalDonations":     donations.count(),
            "totalAmount":        totals["total"] or Decimal("0.00"),
            "averageDonation":    Decimal(str(average)).quantize(Decimal("0.01")),
            "completedDonations": by_status.get(Donation.Status.SUCCESSFUL, 0),
            "pendingDonations":   by_status.get(Donation.Status.PENDING, 0),
            "failedDonations":    by_status.get(Donation.Status.FAILED, 0),
            "thisMonthDonations": this_month.count(),
            "thisMonthAmount":    month_total["total"] or Decimal("0.00"),
        }
