"""Root URL configuration."""
from __future__ import annotations

from django.urls import include, path

from backend.api.views import healthz

urlpatterns = [
    path("v1/", include("backend.api.urls")),
    path("healthz", healthz, name="healthz"),
]
