"""Operations views: liveness/health for load balancers and uptime checks."""

import logging

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger("carespring.ops")


# ── GET /health ───────────────────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Health check: database and cache")
class HealthView(APIView):
    permission_classes     = [AllowAny]
    authentication_classes = []
    throttle_classes       = []

    def get(self, request):
        checks = {}

        try:
            with connection.cursor() as cur:
                cur.execute("SELECT 1")
            checks["database"] = "ok"
        except DatabaseError as exc:
            logger.error("Health check: database unavailable: %s", exc)
            checks["database"] = "error"

        try:
            cache.set("healthcheck", "1", 5)
            checks["cache"] = "ok" if cache.get("healthcheck") == "1" else "miss"
        except Exception as exc:   # backend-specific (redis/locmem) errors
            logger.error("Health check: cache unavailable: %s", exc)
            checks["cache"] = "error"

        healthy = checks["database"] == "ok"
        return Response({
            "status":      "healthy" if healthy else "degraded",
            "timestamp":   timezone.now().isoformat(),
            "version":     settings.APP_VERSION,
            "environment": settings.APP_ENV,
            "checks":      checks,
        }, status=200 if healthy else 503)
