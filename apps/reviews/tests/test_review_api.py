"""API tests for venue reviews."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.reviews.models import Review
from apps.users.models import User
from apps.venues.models import Court, Venue


class ReviewAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            full_name="Ravi Owner",
            role=User.Role.OWNER,
        )
        self.player = User.objects.create_user(
            email="player@example.com",
            password="PlayerPass123",
            full_name="Asha Player",
        )
        self.venue = Venue.objects.create(
            owner=self.owner,
            name="Smash Arena",
            description="Indoor badminton courts with wooden flooring.",
            sports=["badminton"],
            status=Venue.Status.APPROVED,
        )
        self.court = Court.objects.create(
            venue=self.venue,
            name="Court 1",
            sport_type="badminton",
            price_per_hour=Decimal("500.00"),
            opens_at=time(6, 0),
            closes_at=time(22, 0),
        )
        self.url = reverse("venue-reviews", args=[self.venue.id])

    def _booking(self, hour: int, state: str = Booking.Status.COMPLETED) -> Booking:
        return Booking.objects.create(
            user=self.player,
            venue=self.venue,
            court=self.court,
            court_name=self.court.name,
            court_sport_type=self.court.sport_type,
            date=date(2030, 6, 1),
            start_time=time(hour, 0),
            end_time=time(hour + 1, 0),
            duration=1,
            total_price=Decimal("500.00"),
            status=state,
        )

    def _post(self, booking: Booking, rating: int = 5, comment: str = "Great courts and lighting."):
        return self.client.post(
            self.url,
            {"booking_id": booking.id, "rating": rating, "comment": comment},
            format="json",
        )

    def test_player_reviews_completed_booking(self) -> None:
        self.client.force_authenticate(self.player)

        first = self._post(self._booking(8), rating=5)
        second = self._post(self._booking(9), rating=4)

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.data)
        self.venue.refresh_from_db()
        self.assertEqual(self.venue.rating_count, 2)
        self.assertEqual(self.venue.rating_average, Decimal("4.50"))

    def test_reviews_are_public(self) -> None:
        booking = self._booking(8)
        Review.objects.create(user=self.player, venue=self.venue, booking=booking, rating=4, comment="Nice place.")

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["results"][0]["user"]["full_name"], "Asha Player")

    def test_confirmed_booking_cannot_be_reviewed(self) -> None:
        self.client.force_authenticate(self.player)

        response = self._post(self._booking(8, Booking.Status.CONFIRMED))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Review.objects.exists())

    def test_booking_reviewed_only_once(self) -> None:
        self.client.force_authenticate(self.player)
        booking = self._booking(8)
        self._post(booking)

        response = self._post(booking)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Review.objects.count(), 1)

    def test_owner_cannot_review(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self._post(self._booking(8))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_rating_bounds(self) -> None:
        self.client.force_authenticate(self.player)

        response = self._post(self._booking(8), rating=6)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
