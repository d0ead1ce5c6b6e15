"""API views for platform reports.

Both endpoints are admin only. Revenue only counts bookings whose payment
went through, so refunded cancellations drop out of the totals.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.db import models  # type: ignore
from django.db.models.functions import TruncDate  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import Booking
from apps.users.api.permissions import IsPlatformAdmin
from apps.users.models import CustomUser
from apps.venues.models import Venue


class TrendsQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=365, default=30)


class OverviewReportView(APIView):
    """Return headline counters for the whole platform."""

    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, format=None):  # type: ignore
        revenue = Booking.objects.filter(
            payment_status=Booking.PaymentStatus.COMPLETED,
        ).aggregate(total=models.Sum("total_price"))["total"]

        return Response(
            {
                "total_users": CustomUser.objects.filter(role=CustomUser.Role.USER).count(),
                "total_owners": CustomUser.objects.filter(role=CustomUser.Role.OWNER).count(),
                "total_venues": Venue.objects.approved().count(),
                "total_bookings": Booking.objects.count(),
                "total_revenue": revenue or Decimal("0.00"),
            }
        )


class BookingTrendsReportView(APIView):
    """Daily bookings and revenue by creation date, oldest day first."""

    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get(self, request, format=None):  # type: ignore
        query = TrendsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        since = timezone.now() - timedelta(days=query.validated_data["days"])

        rows = (
            Booking.objects.filter(
                created_at__gte=since,
                status__in=[Booking.Status.CONFIRMED, Booking.Status.COMPLETED],
            )
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(bookings=models.Count("id"), revenue=models.Sum("total_price"))
            .order_by("day")
        )
        return Response(
            [{"date": row["day"], "bookings": row["bookings"], "revenue": row["revenue"]} for row in rows]
        )
