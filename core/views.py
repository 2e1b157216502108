# core/views.py
import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Check connectivity to the database and the cache.",
        summary="Health Check",
        tags=["Health"],
    )
    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            cache.set("health:ping", "pong", timeout=5)
            if cache.get("health:ping") != "pong":
                raise ConnectionError("Cache did not return the probe value")
        except (DatabaseError, ConnectionError, OSError) as e:
            logger.error(f"Health check failed: {str(e)}")
            return Response(
                {"status": "error", "message": str(e)},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response({"status": "ok"})
