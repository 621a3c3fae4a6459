"""
Donation admin API: list/create, retrieve/delete, status change, stats.
Staff only (IsAdminUser); every response is wrapped in the
{"status": "success", ...} envelope the dashboard reads.
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import generics, permissions, status
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Donation
from .store import DonationStore
from . import serializers as sz

logger = logging.getLogger("carespring.donations")
donation_store = DonationStore()


# ── GET/POST /api/donations ───────────────────────────────────────────────────
@extend_schema(tags=["Donations"], summary="List donations (newest first) or record one manually")
class DonationListCreateView(generics.ListCreateAPIView):
    serializer_class   = sz.DonationSerializer
    permission_classes = [permissions.IsAdminUser]
    filter_backends    = [DjangoFilterBackend, OrderingFilter]
    filterset_fields   = ["payment_status", "payment_method", "currency"]
    ordering_fields    = ["created_at", "amount"]
    ordering           = ["-created_at"]
    pagination_class   = None

    def get_queryset(self):
        return donation_store.all()

    def list(self, request, *args, **kwargs):
        donations = self.get_serializer(self.filter_queryset(self.get_queryset()), many=True).data
        return Response({
            "status":  "success",
            "results": len(donations),
            "data":    {"donations": donations},
        })

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        donation = donation_store.insert(**ser.validated_data)
        return Response({
            "status":  "success",
            "message": "Donation record created successfully",
            "data":    {"donation": sz.DonationSerializer(donation).data},
        }, status=status.HTTP_201_CREATED)


# ── GET/DELETE /api/donations/<id> ────────────────────────────────────────────
@extend_schema(tags=["Donations"], summary="Retrieve or delete a donation")
class DonationDetailView(APIView):
    permission_classes = [permissions.IsAdminUser]
    serializer_class   = sz.DonationSerializer

    def get(self, request, pk):
        donation = donation_store.get(pk)
        return Response({"status": "success", "data": {"donation": sz.DonationSerializer(donation).data}})

    def delete(self, request, pk):
        donation_store.delete(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ── PATCH /api/donations/<id>/status ──────────────────────────────────────────
@extend_schema(tags=["Donations"], summary="Change a donation's payment status",
               request=sz.DonationStatusSerializer)
class DonationStatusView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def patch(self, request, pk):
        ser = sz.DonationStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        donation = donation_store.update_status(pk, ser.validated_data["paymentStatus"])
        return Response({
            "status":  "success",
            "message": "Donation status updated successfully",
            "data":    {"donation": sz.DonationSerializer(donation).data},
        })


# ── GET /api/donations/stats ──────────────────────────────────────────────────
@extend_schema(tags=["Donations"], summary="Donation totals, averages and this month's figures",
               responses=sz.DonationStatsSerializer)
class DonationStatsView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def get(self, request):
        stats = sz.DonationStatsSerializer(donation_store.stats()).data
        return Response({"status": "success", "data": {"stats": stats}})
