"""URL routing for the platform admin API."""

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AdminDashboardView, AdminUserViewSet, PendingVenueListView, VenueStatusView

router = DefaultRouter()
router.register(r"users", AdminUserViewSet, basename="admin-user")

urlpatterns = [
    path("dashboard/", AdminDashboardView.as_view(), name="admin-dashboard"),
    path("venues/pending/", PendingVenueListView.as_view(), name="admin-venues-pending"),
    path("venues/<int:venue_id>/status/", VenueStatusView.as_view(), name="admin-venue-status"),
    path("", include(router.urls)),
]
