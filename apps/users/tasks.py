"""Celery tasks for the users domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from apps.notifications.services import send_otp_email

from .models import CustomUser

logger = logging.getLogger(__name__)


@shared_task
def send_signup_otp(user_id: int) -> bool:
    """Email the current one-time code to an unverified user."""

    try:
        user = CustomUser.objects.get(pk=user_id)
    except CustomUser.DoesNotExist:
        logger.warning(f"OTP email skipped, user {user_id} no longer exists")
        return False

    if user.is_verified or not user.otp_code:
        return False
    return send_otp_email(user, user.otp_code)


@shared_task(name="users.purge_expired_otps")
def purge_expired_otps() -> dict[str, int]:
    """
    Clear one-time codes whose expiry has passed.

    Runs hourly through Celery Beat.

    Returns:
        dict: {"purged": number of accounts cleaned}
    """
    purged = CustomUser.objects.filter(
        is_verified=False,
        otp_expires_at__lte=timezone.now(),
    ).exclude(otp_code="").update(otp_code="", otp_expires_at=None)

    if purged:
        logger.info(f"Purged {purged} expired OTP codes")
    return {"purged": purged}
