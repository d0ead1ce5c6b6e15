"""Venue API views."""

from __future__ import annotations

import logging

from django.db import models  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import slot_availability

from .filters import VenueFilterSet
from .models import Court, Venue
from .serializers import (
    AvailabilityQuerySerializer,
    CourtSerializer,
    VenueDetailSerializer,
    VenueSerializer,
    VenueWriteSerializer,
)

logger = logging.getLogger(__name__)

POPULAR_VENUES_LIMIT = 6
POPULAR_SPORTS_LIMIT = 8


class IsVenueOwnerOrAdmin(permissions.BasePermission):
    """Owners list venues; the venue's owner and admins manage it."""

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user.is_authenticated:
            return False
        if getattr(view, "action", None) == "create":
            return user.is_owner()
        return True

    def has_object_permission(self, request, view, obj: Venue):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.is_managed_by(request.user)


class VenueViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for discovering and managing venues."""

    queryset = Venue.objects.select_related("owner").prefetch_related("courts")
    permission_classes = [IsVenueOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = VenueFilterSet
    search_fields = ["name", "description"]
    ordering_fields = ["created_at", "name", "rating_average"]
    ordering = ["-created_at"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "list":
            return qs.approved()
        if self.action == "mine":
            return qs.filter(owner=self.request.user)
        return qs.visible_to(self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return VenueWriteSerializer
        if self.action == "retrieve":
            return VenueDetailSerializer
        return VenueSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        venue = serializer.save()
        logger.info(f"Venue {venue.id} submitted for approval by owner {request.user.id}")
        data = VenueSerializer(venue, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED, headers=self.get_success_headers(data))

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        venue = self.get_object()
        serializer = self.get_serializer(venue, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        venue = serializer.save()
        return Response(VenueSerializer(venue, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def mine(self, request):  # type: ignore
        """Venues of the calling owner in any moderation status."""
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(VenueSerializer(page, many=True).data)
        return Response(VenueSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def popular(self, request):  # type: ignore
        """
        Most booked approved venues and most played sports.

        GET /api/v1/venues/popular/
        """
        venues = (
            Venue.objects.approved()
            .select_related("owner")
            .prefetch_related("courts")
            .annotate(booking_count=models.Count("bookings"))
            .filter(booking_count__gt=0)
            .order_by("-booking_count", "-rating_average")[:POPULAR_VENUES_LIMIT]
        )
        sports = (
            Booking.objects.values("court_sport_type")
            .annotate(count=models.Count("id"))
            .order_by("-count", "court_sport_type")[:POPULAR_SPORTS_LIMIT]
        )
        return Response(
            {
                "popular_venues": [
                    {**VenueSerializer(venue).data, "booking_count": venue.booking_count}
                    for venue in venues
                ],
                "popular_sports": [
                    {"sport": row["court_sport_type"], "count": row["count"]} for row in sports
                ],
            }
        )

    @action(detail=True, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request, pk=None):  # type: ignore
        """
        Hourly availability of one court.

        GET /api/v1/venues/{id}/availability/?court_id=3&date=2025-03-01
        """
        venue = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        court = get_object_or_404(Court, pk=query.validated_data["court_id"], venue=venue)
        on = query.validated_data["date"]
        return Response(
            {
                "venue_id": venue.id,
                "court_id": court.id,
                "date": on,
                "is_active": court.is_active,
                "slots": slot_availability(court, on),
            }
        )

    @action(detail=True, methods=["post"], url_path="courts")
    def add_court(self, request, pk=None):  # type: ignore
        """Add a court to the venue."""
        venue = self.get_object()
        serializer = CourtSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        court = serializer.save(venue=venue)
        logger.info(f"Court {court.id} added to venue {venue.id}")
        return Response(CourtSerializer(court).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["patch"], url_path=r"courts/(?P<court_id>\d+)")
    def update_court(self, request, pk=None, court_id=None):  # type: ignore
        """Change a court's price, hours or active flag."""
        venue = self.get_object()
        court = get_object_or_404(Court, pk=court_id, venue=venue)
        serializer = CourtSerializer(court, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
