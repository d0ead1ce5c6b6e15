"""API tests for venue discovery and management."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User
from apps.venues.models import Court, Venue


class VenueAPITests(APITestCase):
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
        self.arena = self._venue("Smash Arena", "Pune", ["badminton"], status=Venue.Status.APPROVED)
        self._court(self.arena, "Court 1", "badminton", "400.00")
        self.turf = self._venue("Goal Turf", "Mumbai", ["football"], status=Venue.Status.APPROVED)
        self._court(self.turf, "Pitch A", "football", "1200.00")
        self.pending = self._venue("Hidden Courts", "Pune", ["tennis"])
        self.list_url = reverse("venue-list")

    def _venue(self, name: str, city: str, sports: list[str], **extra) -> Venue:
        return Venue.objects.create(
            owner=self.owner,
            name=name,
            description=f"{name} is a well kept sports facility.",
            address_city=city,
            sports=sports,
            **extra,
        )

    def _court(self, venue: Venue, name: str, sport: str, price: str) -> Court:
        return Court.objects.create(
            venue=venue,
            name=name,
            sport_type=sport,
            price_per_hour=Decimal(price),
            opens_at=time(6, 0),
            closes_at=time(10, 0),
        )

    def _names(self, response) -> set[str]:
        return {row["name"] for row in response.data["results"]}

    # --- Discovery -----------------------------------------------------------
    def test_public_list_shows_only_approved(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(self._names(response), {"Smash Arena", "Goal Turf"})

    def test_list_filters(self) -> None:
        self.assertEqual(self._names(self.client.get(self.list_url, {"sport": "football"})), {"Goal Turf"})
        self.assertEqual(self._names(self.client.get(self.list_url, {"city": "pune"})), {"Smash Arena"})
        self.assertEqual(self._names(self.client.get(self.list_url, {"max_price": "500"})), {"Smash Arena"})
        self.assertEqual(self._names(self.client.get(self.list_url, {"min_price": "500"})), {"Goal Turf"})
        self.assertEqual(self._names(self.client.get(self.list_url, {"search": "smash"})), {"Smash Arena"})

    def test_pending_venue_hidden_from_public_detail(self) -> None:
        response = self.client.get(reverse("venue-detail", args=[self.pending.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_owner_sees_own_pending_venue(self) -> None:
        self.client.force_authenticate(self.owner)

        detail = self.client.get(reverse("venue-detail", args=[self.pending.id]))
        mine = self.client.get(reverse("venue-mine"))

        self.assertEqual(detail.status_code, status.HTTP_200_OK, detail.data)
        self.assertEqual(detail.data["status"], Venue.Status.PENDING)
        self.assertEqual(self._names(mine), {"Smash Arena", "Goal Turf", "Hidden Courts"})

    def test_detail_includes_courts_rating_and_reviews(self) -> None:
        response = self.client.get(reverse("venue-detail", args=[self.arena.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["courts"][0]["opens_at"], "06:00")
        self.assertEqual(response.data["rating"], {"average": 0.0, "count": 0})
        self.assertEqual(response.data["reviews"], [])
        self.assertEqual(response.data["address"]["city"], "Pune")

    # --- Management ----------------------------------------------------------
    def _create_payload(self) -> dict:
        return {
            "name": "Rally Point",
            "description": "Two synthetic tennis courts with lights.",
            "address": {"street": "12 MG Road", "city": "Bengaluru", "lat": "12.971600", "lng": "77.594600"},
            "sports": ["tennis"],
            "amenities": ["parking"],
            "courts": [
                {
                    "name": "T1",
                    "sport_type": "tennis",
                    "price_per_hour": "650.00",
                    "opens_at": "07:00",
                    "closes_at": "21:00",
                }
            ],
        }

    def test_owner_creates_pending_venue_with_courts(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.post(self.list_url, self._create_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Venue.Status.PENDING)
        self.assertEqual(response.data["address"]["coordinates"], {"lat": 12.9716, "lng": 77.5946})
        venue = Venue.objects.get(name="Rally Point")
        self.assertEqual(venue.courts.get().price_per_hour, Decimal("650.00"))

    def test_player_cannot_create_venue(self) -> None:
        self.client.force_authenticate(self.player)

        response = self.client.post(self.list_url, self._create_payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_validates_input(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = self._create_payload()
        payload["sports"] = []
        payload["courts"][0]["closes_at"] = "06:00"

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("sports", response.data)
        self.assertIn("courts", response.data)

    def test_owner_updates_venue(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.patch(
            reverse("venue-detail", args=[self.arena.id]),
            {"name": "Smash Arena Pro", "address": {"city": "Pune East"}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.arena.refresh_from_db()
        self.assertEqual(self.arena.name, "Smash Arena Pro")
        self.assertEqual(self.arena.address_city, "Pune East")

    def test_update_cannot_replace_courts(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.patch(
            reverse("venue-detail", args=[self.arena.id]),
            {"courts": []},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_user_cannot_update_venue(self) -> None:
        self.client.force_authenticate(self.player)

        response = self.client.patch(
            reverse("venue-detail", args=[self.arena.id]),
            {"name": "Taken Over"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_owner_adds_and_deactivates_court(self) -> None:
        self.client.force_authenticate(self.owner)

        created = self.client.post(
            reverse("venue-add-court", args=[self.arena.id]),
            {
                "name": "Court 2",
                "sport_type": "badminton",
                "price_per_hour": "450.00",
                "opens_at": "06:00",
                "closes_at": "22:00",
            },
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED, created.data)

        updated = self.client.patch(
            reverse("venue-update-court", args=[self.arena.id, created.data["id"]]),
            {"is_active": False},
            format="json",
        )

        self.assertEqual(updated.status_code, status.HTTP_200_OK, updated.data)
        self.assertFalse(Court.objects.get(pk=created.data["id"]).is_active)

    def test_court_hours_must_be_ordered(self) -> None:
        self.client.force_authenticate(self.owner)
        court = self.arena.courts.get()

        response = self.client.patch(
            reverse("venue-update-court", args=[self.arena.id, court.id]),
            {"closes_at": "05:00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # --- Availability and popularity ------------------------------------------
    def test_availability_marks_booked_hours(self) -> None:
        court = self.arena.courts.get()
        Booking.objects.create(
            user=self.player,
            venue=self.arena,
            court=court,
            court_name=court.name,
            court_sport_type=court.sport_type,
            date=date(2030, 6, 1),
            start_time=time(7, 0),
            end_time=time(8, 0),
            duration=1,
            total_price=Decimal("400.00"),
        )

        response = self.client.get(
            reverse("venue-availability", args=[self.arena.id]),
            {"court_id": court.id, "date": "2030-06-01"},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            [slot["available"] for slot in response.data["slots"]],
            [True, False, True, True],
        )

    def test_availability_requires_court_of_venue(self) -> None:
        other_court = self.turf.courts.get()

        response = self.client.get(
            reverse("venue-availability", args=[self.arena.id]),
            {"court_id": other_court.id, "date": "2030-06-01"},
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_popular_ranks_by_bookings(self) -> None:
        court = self.turf.courts.get()
        for hour in (6, 7):
            Booking.objects.create(
                user=self.player,
                venue=self.turf,
                court=court,
                court_name=court.name,
                court_sport_type=court.sport_type,
                date=date(2030, 6, 1),
                start_time=time(hour, 0),
                end_time=time(hour + 1, 0),
                duration=1,
                total_price=Decimal("1200.00"),
            )

        response = self.client.get(reverse("venue-popular"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([row["name"] for row in response.data["popular_venues"]], ["Goal Turf"])
        self.assertEqual(response.data["popular_venues"][0]["booking_count"], 2)
        self.assertEqual(response.data["popular_sports"], [{"sport": "football", "count": 2}])
