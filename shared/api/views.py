"""Service-level endpoints that do not belong to a single domain app."""

from __future__ import annotations

import structlog
from django.conf import settings  # type: ignore
from django.db import DatabaseError, connection  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

logger = structlog.get_logger(__name__)


class HealthView(APIView):
    """Liveness probe with a database round-trip."""

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        payload = {
            "status": "ok",
            "timestamp": timezone.now().isoformat(),
            "environment": settings.ENVIRONMENT,
        }
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError as exc:
            logger.error("health.fail", error=str(exc))
            payload.update(status="unhealthy", database="unavailable")
            return Response(payload, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        logger.info("health.ok", database="connected")
        payload["database"] = "connected"
        return Response(payload)
