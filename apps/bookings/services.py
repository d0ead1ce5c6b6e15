"""Domain services for booking workflows.

``reserve_slot`` is the only place a confirmed booking is created. It checks
the venue and court, then runs the overlap check and the insert in one
transaction that holds a row lock on the court, so two requests for the same
court are serialized. A partial unique index on confirmed bookings backs the
lock on databases without row locking.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import APIException, NotFound  # type: ignore

from apps.venues.models import Court, Venue
from shared.domain.value_objects import Money, TimeSlot

from .models import Booking

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


class SlotConflictError(APIException):
    """Raised when a confirmed booking already overlaps the requested slot."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Time slot already booked."
    default_code = "slot_conflict"


class VenueNotApprovedError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Venue not available for booking."
    default_code = "venue_not_approved"


class CourtInactiveError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Court not available."
    default_code = "court_inactive"


class BookingStateError(APIException):
    """Raised for transitions the booking lifecycle does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Booking cannot change state."
    default_code = "invalid_state"


class BookingPermissionError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied."
    default_code = "forbidden"


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def overlapping_bookings(venue_id: int, court_id: int, booking_date: date, slot: TimeSlot):
    """Confirmed bookings on the venue court and day whose slot intersects ``slot``."""

    overlapping_filter = Q(start_time__lt=slot.end) & Q(end_time__gt=slot.start)
    return Booking.objects.filter(
        venue_id=venue_id,
        court_id=court_id,
        date=booking_date,
        status=Booking.Status.CONFIRMED,
    ).filter(overlapping_filter)


def _load_bookable_court(venue_id: int, court_id: int) -> tuple[Venue, Court]:
    try:
        venue = Venue.objects.select_related("owner").get(pk=venue_id)
    except Venue.DoesNotExist:
        raise NotFound("Venue not found.")
    if not venue.is_approved:
        raise VenueNotApprovedError()

    try:
        court = venue.courts.get(pk=court_id)
    except Court.DoesNotExist:
        raise NotFound("Court not found.")
    if not court.is_active:
        raise CourtInactiveError()
    return venue, court


def reserve_slot(
    *,
    user: "CustomUser",
    venue_id: int,
    court_id: int,
    booking_date: date,
    slot: TimeSlot,
    duration: int,
) -> Booking:
    """Create a confirmed booking if the slot is free."""

    venue, court = _load_bookable_court(venue_id, court_id)
    price = Money(court.price_per_hour, settings.QUICKCOURT_CURRENCY) * duration

    try:
        with transaction.atomic():
            _lock_queryset_if_possible(Court.objects.filter(pk=court.pk)).get()
            if overlapping_bookings(venue.pk, court.pk, booking_date, slot).exists():
                raise SlotConflictError()

            booking = Booking.objects.create(
                user=user,
                venue=venue,
                court=court,
                court_name=court.name,
                court_sport_type=court.sport_type,
                date=booking_date,
                start_time=slot.start,
                end_time=slot.end,
                duration=duration,
                total_price=price.amount,
                status=Booking.Status.CONFIRMED,
                # Payment is simulated: a confirmed booking is a paid one.
                payment_status=Booking.PaymentStatus.COMPLETED,
            )
    except SlotConflictError:
        logger.info(f"Slot conflict for court {court.pk} on {booking_date} {slot}")
        raise
    except IntegrityError:
        logger.info(f"Slot conflict for court {court.pk} on {booking_date} {slot} (unique index)")
        raise SlotConflictError()

    logger.info(f"Booking {booking.pk} confirmed for user {user.pk} on court {court.pk} {booking_date} {slot}")
    _notify_on_commit("notify_booking_confirmed", booking.pk)
    return booking


def _get_booking(booking_id: int) -> Booking:
    try:
        return _lock_queryset_if_possible(
            Booking.objects.select_related("venue", "user")
        ).get(pk=booking_id)
    except Booking.DoesNotExist:
        raise NotFound("Booking not found.")


@transaction.atomic
def cancel_booking(*, booking_id: int, user: "CustomUser", reason: str = "") -> Booking:
    """Cancel a future confirmed booking on behalf of the player who made it."""

    booking = _get_booking(booking_id)
    if booking.user_id != user.pk:
        raise BookingPermissionError()
    if booking.status != Booking.Status.CONFIRMED:
        raise BookingStateError("Booking cannot be cancelled.")
    if booking.has_started:
        raise BookingStateError("Cannot cancel past bookings.")

    booking.status = Booking.Status.CANCELLED
    booking.payment_status = Booking.PaymentStatus.REFUNDED
    booking.cancellation_reason = reason
    booking.save(update_fields=["status", "payment_status", "cancellation_reason", "updated_at"])

    logger.info(f"Booking {booking.pk} cancelled by user {user.pk}")
    _notify_on_commit("notify_booking_cancelled", booking.pk)
    return booking


@transaction.atomic
def complete_booking(*, booking_id: int, user: "CustomUser") -> Booking:
    """Mark a confirmed booking as played, by the player or the venue owner."""

    booking = _get_booking(booking_id)
    if not booking.can_be_completed_by(user):
        raise BookingPermissionError()
    if booking.status != Booking.Status.CONFIRMED:
        raise BookingStateError("Only confirmed bookings can be completed.")

    booking.status = Booking.Status.COMPLETED
    booking.save(update_fields=["status", "updated_at"])

    logger.info(f"Booking {booking.pk} completed by user {user.pk}")
    return booking


def slot_availability(court: Court, on: date) -> list[dict[str, object]]:
    """Hourly grid of the court's operating hours with free/busy flags."""

    taken = [
        TimeSlot(start, end)
        for start, end in Booking.objects.filter(
            court=court,
            date=on,
            status=Booking.Status.CONFIRMED,
        ).values_list("start_time", "end_time")
    ]
    grid = []
    for slot in TimeSlot.hourly(court.opens_at, court.closes_at):
        grid.append({**slot.as_dict(), "available": not any(slot.overlaps_with(t) for t in taken)})
    return grid


def _notify_on_commit(task_name: str, booking_id: int) -> None:
    from . import tasks

    task = getattr(tasks, task_name)
    transaction.on_commit(lambda: task.delay(booking_id))
