"""API views for managing reviews."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import generics, permissions, serializers, status  # type: ignore
from rest_framework.exceptions import PermissionDenied  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import Booking
from apps.venues.models import Venue

from .models import Review
from .serializers import ReviewCreateSerializer, ReviewSerializer

logger = logging.getLogger(__name__)


class VenueReviewListCreateView(generics.ListCreateAPIView):
    """Reviews of one venue; players post one review per completed booking."""

    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    def get_serializer_class(self):  # type: ignore
        if self.request.method == "POST":
            return ReviewCreateSerializer
        return ReviewSerializer

    def get_venue(self) -> Venue:
        return get_object_or_404(Venue.objects.visible_to(self.request.user), pk=self.kwargs["venue_id"])

    def get_queryset(self):  # type: ignore
        return Review.objects.select_related("user").filter(venue=self.get_venue())

    def create(self, request, *args, **kwargs):  # type: ignore
        user = request.user
        if user.role != user.Role.USER:
            raise PermissionDenied("Only users can leave reviews.")

        venue = self.get_venue()
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        # Check that the booking is the caller's completed booking at this venue
        booking = Booking.objects.filter(
            id=data["booking_id"],
            user=user,
            venue=venue,
            status=Booking.Status.COMPLETED,
        ).first()
        if booking is None:
            raise serializers.ValidationError({"detail": "You can only review venues you have used."})
        if Review.objects.filter(booking=booking).exists():
            raise serializers.ValidationError({"detail": "You have already reviewed this booking."})

        with transaction.atomic():
            review = Review.objects.create(
                user=user,
                venue=venue,
                booking=booking,
                rating=data["rating"],
                comment=data["comment"],
            )
            venue.refresh_rating()

        logger.info(f"Review {review.id} added for venue {venue.id} by user {user.id}")
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)
