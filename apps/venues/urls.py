"""URL routing for the venues domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import VenueViewSet

# SimpleRouter: an API root view would shadow the list route at the empty prefix.
router = SimpleRouter()
router.register(r"", VenueViewSet, basename="venue")

urlpatterns = [
    path("", include("apps.reviews.urls")),
    path("", include(router.urls)),
]
