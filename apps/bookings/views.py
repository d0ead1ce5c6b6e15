"""API views for the booking domain."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.db import models  # type: ignore
from django.db.models.functions import ExtractHour  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import PermissionDenied  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.venues.models import Venue

from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    VenueAnalyticsQuerySerializer,
    VenueBookingsQuerySerializer,
)
from .services import cancel_booking, complete_booking

ACTIVE_STATUSES = (Booking.Status.CONFIRMED, Booking.Status.COMPLETED)


class IsBookingStakeholder(permissions.BasePermission):
    """The player, the venue owner and admins may see a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        return obj.is_visible_to(request.user)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for creating bookings and moving them through their lifecycle."""

    queryset = Booking.objects.select_related("user", "venue", "venue__owner")
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "cancel":
            return BookingCancelSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action in {"list", "my_bookings"}:
            qs = qs.filter(user=self.request.user)
            status_filter = self.request.query_params.get("status")
            if status_filter:
                qs = qs.filter(status=status_filter)
        return qs

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=False, methods=["get"], url_path="my-bookings")
    def my_bookings(self, request):  # type: ignore
        """Alias of the list endpoint: the caller's bookings, newest first."""
        return self.list(request)

    @action(detail=True, methods=["patch"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = cancel_booking(
            booking_id=pk,
            user=request.user,
            reason=serializer.validated_data["cancellation_reason"],
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"])
    def complete(self, request, pk=None):  # type: ignore
        booking = complete_booking(booking_id=pk, user=request.user)
        return Response(BookingSerializer(booking).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path=r"venue/(?P<venue_id>\d+)")
    def venue(self, request, venue_id=None):  # type: ignore
        """
        Bookings of one venue for its owner.

        GET /api/v1/bookings/venue/{venue_id}/?status=confirmed&date=2025-03-01
        """
        venue = self._get_owned_venue(venue_id)
        query = VenueBookingsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        qs = Booking.objects.select_related("user", "venue").filter(venue=venue)
        if "status" in query.validated_data:
            qs = qs.filter(status=query.validated_data["status"])
        if "date" in query.validated_data:
            qs = qs.filter(date=query.validated_data["date"])
        qs = qs.order_by("date", "start_time")

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(BookingSerializer(page, many=True).data)
        return Response(BookingSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"analytics/(?P<venue_id>\d+)")
    def analytics(self, request, venue_id=None):  # type: ignore
        """
        Earnings and demand figures of one venue for its owner.

        GET /api/v1/bookings/analytics/{venue_id}/?period=30

        Returns totals over all time, daily trends within the period and
        the most booked start hours.
        """
        venue = self._get_owned_venue(venue_id)
        query = VenueAnalyticsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        period_days = query.validated_data["period"]

        return Response(self._calculate_venue_stats(venue, period_days))

    def _get_owned_venue(self, venue_id) -> Venue:  # type: ignore
        venue = get_object_or_404(Venue, pk=venue_id)
        if venue.owner_id != self.request.user.id:
            raise PermissionDenied("Access denied.")
        return venue

    @staticmethod
    def _calculate_venue_stats(venue: Venue, period_days: int) -> dict:  # type: ignore
        active_qs = Booking.objects.filter(venue=venue, status__in=ACTIVE_STATUSES)

        total_earnings = active_qs.aggregate(total=models.Sum("total_price"))["total"] or Decimal("0.00")

        start_date = timezone.localdate() - timedelta(days=period_days)
        trends = (
            active_qs.filter(date__gte=start_date)
            .values("date")
            .annotate(bookings=models.Count("id"), earnings=models.Sum("total_price"))
            .order_by("date")
        )

        peak_hours = (
            active_qs.annotate(hour=ExtractHour("start_time"))
            .values("hour")
            .annotate(count=models.Count("id"))
            .order_by("-count", "hour")
        )

        return {
            "venue_id": venue.id,
            "period_days": period_days,
            "total_bookings": active_qs.count(),
            "total_earnings": total_earnings,
            "active_courts": venue.courts.filter(is_active=True).count(),
            "booking_trends": [
                {"date": row["date"], "bookings": row["bookings"], "earnings": row["earnings"]}
                for row in trends
            ],
            "peak_hours": [{"hour": f"{row['hour']:02d}:00", "count": row["count"]} for row in peak_hours],
        }
