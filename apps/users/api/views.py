"""API views for platform admin operations."""

from __future__ import annotations

import logging
from datetime import timedelta

from django.db import models, transaction  # type: ignore
from django.db.models.functions import TruncDate  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import generics, mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.serializers import BookingSerializer
from apps.users.models import CustomUser
from apps.venues.models import Court, Venue
from apps.venues.serializers import VenueSerializer
from apps.venues.tasks import notify_venue_status

from .permissions import IsPlatformAdmin
from .serializers import AdminUserSerializer, UserStatusSerializer, VenueStatusSerializer

logger = logging.getLogger(__name__)

CHART_WINDOW_DAYS = 30
ACTIVE_SPORTS_LIMIT = 10


class AdminDashboardView(APIView):
    """
    Platform-wide counters and 30-day charts.

    GET /api/v1/admin/dashboard/
    """

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def get(self, request):  # type: ignore
        since = timezone.now() - timedelta(days=CHART_WINDOW_DAYS)

        stats = {
            "total_users": CustomUser.objects.filter(role=CustomUser.Role.USER).count(),
            "total_facility_owners": CustomUser.objects.filter(role=CustomUser.Role.OWNER).count(),
            "total_bookings": Booking.objects.count(),
            "total_active_courts": Court.objects.filter(
                is_active=True,
                venue__status=Venue.Status.APPROVED,
            ).count(),
        }

        booking_activity = (
            Booking.objects.filter(created_at__gte=since)
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(bookings=models.Count("id"), earnings=models.Sum("total_price"))
            .order_by("day")
        )
        user_registrations = (
            CustomUser.objects.filter(created_at__gte=since)
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(users=models.Count("id"))
            .order_by("day")
        )
        facility_approvals = (
            Venue.objects.filter(status=Venue.Status.APPROVED, updated_at__gte=since)
            .annotate(day=TruncDate("updated_at"))
            .values("day")
            .annotate(facilities=models.Count("id"))
            .order_by("day")
        )
        active_sports = (
            Booking.objects.values("court_sport_type")
            .annotate(bookings=models.Count("id"))
            .order_by("-bookings", "court_sport_type")[:ACTIVE_SPORTS_LIMIT]
        )

        return Response(
            {
                "stats": stats,
                "charts": {
                    "booking_activity": list(booking_activity),
                    "user_registrations": list(user_registrations),
                    "facility_approvals": list(facility_approvals),
                    "active_sports": [
                        {"sport": row["court_sport_type"], "bookings": row["bookings"]}
                        for row in active_sports
                    ],
                },
            }
        )


class PendingVenueListView(generics.ListAPIView):
    """Venues waiting for moderation, newest first."""

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]
    serializer_class = VenueSerializer
    queryset = (
        Venue.objects.filter(status=Venue.Status.PENDING)
        .select_related("owner")
        .prefetch_related("courts")
        .order_by("-created_at")
    )


class VenueStatusView(APIView):
    """
    Approve or reject a venue.

    PATCH /api/v1/admin/venues/{id}/status/
    """

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    def patch(self, request, venue_id: int):  # type: ignore
        serializer = VenueStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        venue = get_object_or_404(Venue.objects.select_related("owner"), pk=venue_id)

        venue.status = serializer.validated_data["status"]
        if venue.status == Venue.Status.REJECTED:
            venue.rejection_reason = serializer.validated_data["rejection_reason"]
        else:
            venue.rejection_reason = ""
        venue.save(update_fields=["status", "rejection_reason", "updated_at"])

        logger.info(f"Venue {venue.id} marked {venue.status} by admin {request.user.id}")
        transaction.on_commit(lambda: notify_venue_status.delay(venue.id))
        return Response(VenueSerializer(venue).data, status=status.HTTP_200_OK)


class AdminUserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for moderating accounts.

    Endpoints:
    - GET /api/v1/admin/users/?role=owner&status=active&search=ann - list users
    - PATCH /api/v1/admin/users/{id}/status/ - activate or suspend a user
    - GET /api/v1/admin/users/{id}/bookings/ - booking history of a user
    """

    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]
    serializer_class = AdminUserSerializer
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        qs = CustomUser.objects.annotate(bookings_count=models.Count("bookings")).order_by("-created_at")
        params = self.request.query_params

        role = params.get("role")
        if role and role != "all":
            qs = qs.filter(role=role)

        account_status = params.get("status")
        if account_status in {"active", "inactive"}:
            qs = qs.filter(is_active=account_status == "active")

        search = params.get("search")
        if search:
            qs = qs.filter(models.Q(full_name__icontains=search) | models.Q(email__icontains=search))
        return qs

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):  # type: ignore
        """
        Activate or suspend a user.

        Admin accounts cannot be modified through the API.
        """
        user = get_object_or_404(CustomUser, pk=pk)
        if user.is_admin():
            return Response(
                {"detail": "Cannot modify admin users."},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.is_active = serializer.validated_data["is_active"]
        user.save(update_fields=["is_active", "updated_at"])

        verb = "activated" if user.is_active else "deactivated"
        logger.info(f"User {user.id} {verb} by admin {request.user.id}")
        return Response({"detail": f"User {verb} successfully."}, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"])
    def bookings(self, request, pk=None):  # type: ignore
        """Booking history of one user, newest first."""
        user = get_object_or_404(CustomUser, pk=pk)
        qs = Booking.objects.select_related("user", "venue").filter(user=user).order_by("-created_at")
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(BookingSerializer(page, many=True).data)
        return Response(BookingSerializer(qs, many=True).data)
