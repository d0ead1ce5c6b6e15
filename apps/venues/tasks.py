"""Celery tasks for the venues domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.services import send_venue_status_email

from .models import Venue

logger = logging.getLogger(__name__)


@shared_task(name="venues.notify_venue_status")
def notify_venue_status(venue_id: int) -> bool:
    """Tell the owner their venue was approved or rejected."""
    try:
        venue = Venue.objects.select_related("owner").get(pk=venue_id)
    except Venue.DoesNotExist:
        logger.error(f"Venue {venue_id} not found for status notification")
        return False
    return send_venue_status_email(venue)
