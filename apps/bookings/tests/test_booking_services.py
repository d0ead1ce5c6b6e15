"""Tests for the booking domain services."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from unittest import mock

from django.db.models import ProtectedError
from django.test import TestCase

from apps.bookings.models import Booking
from apps.bookings.services import (
    SlotConflictError,
    overlapping_bookings,
    reserve_slot,
    slot_availability,
)
from apps.users.models import User
from apps.venues.models import Court, Venue
from shared.domain.value_objects import TimeSlot

PLAY_DATE = date(2030, 6, 1)


class BookingServiceTests(TestCase):
    def setUp(self) -> None:
        self.player = User.objects.create_user(
            email="player@example.com",
            password="PlayerPass123",
            full_name="Asha Player",
        )
        owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            full_name="Ravi Owner",
            role=User.Role.OWNER,
        )
        self.venue = Venue.objects.create(
            owner=owner,
            name="Net Play",
            description="Outdoor tennis courts near the river.",
            sports=["tennis"],
            status=Venue.Status.APPROVED,
        )
        self.court = Court.objects.create(
            venue=self.venue,
            name="Clay 1",
            sport_type="tennis",
            price_per_hour=Decimal("750.50"),
            opens_at=time(8, 0),
            closes_at=time(12, 0),
        )

    def _reserve(self, start: str, end: str, duration: int = 1) -> Booking:
        return reserve_slot(
            user=self.player,
            venue_id=self.venue.id,
            court_id=self.court.id,
            booking_date=PLAY_DATE,
            slot=TimeSlot.parse(start, end),
            duration=duration,
        )

    def test_reserve_slot_snapshots_court_and_price(self) -> None:
        booking = self._reserve("08:00", "10:00", duration=2)

        self.assertEqual(booking.total_price, Decimal("1501.00"))
        self.assertEqual(booking.court_name, "Clay 1")
        self.assertEqual(booking.court_sport_type, "tennis")
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)

    def test_overlap_query_ignores_touching_and_cancelled(self) -> None:
        self._reserve("09:00", "10:00")
        cancelled = self._reserve("10:00", "11:00")
        cancelled.status = Booking.Status.CANCELLED
        cancelled.save(update_fields=["status"])

        def overlaps(start: str, end: str) -> bool:
            slot = TimeSlot.parse(start, end)
            return overlapping_bookings(self.venue.id, self.court.id, PLAY_DATE, slot).exists()

        self.assertTrue(overlaps("09:30", "10:30"))
        self.assertTrue(overlaps("08:00", "11:00"))
        self.assertFalse(overlaps("08:00", "09:00"))
        self.assertFalse(overlaps("10:00", "11:00"))

    def test_unique_index_turns_race_into_conflict(self) -> None:
        self._reserve("09:00", "10:00")

        # Simulate a competing request that passed the overlap check first.
        with mock.patch(
            "apps.bookings.services.overlapping_bookings",
            return_value=Booking.objects.none(),
        ):
            with self.assertRaises(SlotConflictError):
                self._reserve("09:00", "10:00")

        self.assertEqual(Booking.objects.filter(status=Booking.Status.CONFIRMED).count(), 1)

    def test_slot_availability_marks_taken_hours(self) -> None:
        self._reserve("09:00", "10:00")

        grid = slot_availability(self.court, PLAY_DATE)

        self.assertEqual(
            grid,
            [
                {"start": "08:00", "end": "09:00", "available": True},
                {"start": "09:00", "end": "10:00", "available": False},
                {"start": "10:00", "end": "11:00", "available": True},
                {"start": "11:00", "end": "12:00", "available": True},
            ],
        )

    def test_court_edits_do_not_rewrite_bookings(self) -> None:
        booking = self._reserve("08:00", "09:00")

        self.court.name = "Clay Centre"
        self.court.sport_type = "pickleball"
        self.court.price_per_hour = Decimal("900.00")
        self.court.save()

        booking.refresh_from_db()
        self.assertEqual(booking.total_price, Decimal("750.50"))
        self.assertEqual(booking.court_name, "Clay 1")
        self.assertEqual(booking.court_sport_type, "tennis")
        self.assertEqual(booking.court_id, self.court.id)

    def test_court_with_bookings_cannot_be_deleted(self) -> None:
        booking = self._reserve("08:00", "09:00")

        with self.assertRaises(ProtectedError):
            self.court.delete()

        booking.refresh_from_db()
        self.assertEqual(booking.court_id, self.court.id)
