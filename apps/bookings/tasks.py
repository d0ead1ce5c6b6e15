"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.services import (
    send_booking_cancellation_email,
    send_booking_confirmation_email,
    send_new_booking_to_owner_email,
)

from .models import Booking

logger = logging.getLogger(__name__)


def _load_booking(booking_id: int) -> Booking | None:
    try:
        return Booking.objects.select_related("user", "venue", "venue__owner").get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for notification")
        return None


@shared_task(name="bookings.notify_booking_confirmed")
def notify_booking_confirmed(booking_id: int) -> bool:
    """Email the player and the venue owner about a new booking."""
    booking = _load_booking(booking_id)
    if booking is None:
        return False

    sent_to_user = send_booking_confirmation_email(booking)
    send_new_booking_to_owner_email(booking)
    logger.info(f"[NOTIFICATION] Booking confirmed notifications sent: {booking.id}")
    return sent_to_user


@shared_task(name="bookings.notify_booking_cancelled")
def notify_booking_cancelled(booking_id: int) -> bool:
    """Email the player the cancellation and refund notice."""
    booking = _load_booking(booking_id)
    if booking is None:
        return False

    sent = send_booking_cancellation_email(booking)
    logger.info(f"[NOTIFICATION] Booking cancelled notification sent: {booking.id}")
    return sent
