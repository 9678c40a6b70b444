# backend/urls.py
"""
PROJECT URLS

Catalog writes go through the stock import service and management commands.
Over HTTP the project exposes:
- /api/health/ (AllowAny): DB round-trip plus catalog row counts
- Django admin (read-only catalog listing), mounted at ADMIN_PATH
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from catalog.models import Category, Product


@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    200 with catalog counts when the database answers, 503 otherwise.
    """
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
        catalog = {
            "products": Product.objects.count(),
            "categories": Category.objects.count(),
        }
    except DatabaseError as e:
        return Response({"status": "degraded", "db": "down", "error": str(e)}, status=503)

    return Response({"status": "ok", "db": "ok", "catalog": catalog})


# Keep trailing slash; production should use a non-obvious ADMIN_PATH.
ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/")
if not ADMIN_PATH.endswith("/"):
    ADMIN_PATH = f"{ADMIN_PATH}/"

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("api/", include([path("health/", health_check, name="health-check")])),
]
