"""Notification services for sending transactional emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import format_html, strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser
    from apps.bookings.models import Booking
    from apps.venues.models import Venue

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(recipient_email: str, subject: str, html_message: str) -> bool:
    """
    Generic email sender used by every notification below.

    Args:
        recipient_email: Recipient address
        subject: Email subject
        html_message: HTML body; the plain-text part is derived from it

    Returns:
        bool: True if the email was handed to the backend
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def send_otp_email(user: "CustomUser", code: str) -> bool:
    """One-time verification code for signup."""
    html_message = format_html(
        """
    <html>
    <body>
        <h2>Hello, {}!</h2>
        <p>Your QuickCourt verification code is:</p>
        <h1 style="letter-spacing: 4px;">{}</h1>
        <p>The code expires in {} minutes.</p>
        <p>If you did not sign up, you can ignore this email.</p>
    </body>
    </html>
    """,
        user.full_name,
        code,
        settings.QUICKCOURT_OTP_TTL_MINUTES,
    )

    return send_email_notification(
        recipient_email=user.email,
        subject="QuickCourt - Email verification code",
        html_message=html_message,
    )


def send_booking_confirmation_email(booking: "Booking") -> bool:
    """Booking confirmation for the player."""
    html_message = format_html(
        """
    <html>
    <body>
        <h2>Hello, {}!</h2>
        <p>Your booking is confirmed.</p>

        <h3>Booking details:</h3>
        <ul>
            <li><strong>Venue:</strong> {}</li>
            <li><strong>Court:</strong> {}</li>
            <li><strong>Date:</strong> {}</li>
            <li><strong>Time:</strong> {}</li>
            <li><strong>Total:</strong> {} {}</li>
        </ul>

        <p>See you on court!<br>QuickCourt</p>
    </body>
    </html>
    """,
        booking.user.full_name or booking.user.email,
        booking.venue.name,
        booking.court_name,
        booking.date.strftime("%d.%m.%Y"),
        str(booking.time_slot),
        booking.total_price,
        settings.QUICKCOURT_CURRENCY,
    )

    return send_email_notification(
        recipient_email=booking.user.email,
        subject=f"Booking #{booking.id} confirmed",
        html_message=html_message,
    )


def send_booking_cancellation_email(booking: "Booking") -> bool:
    """Cancellation and refund notice for the player."""
    html_message = format_html(
        """
    <html>
    <body>
        <h2>Hello, {}!</h2>
        <p>Your booking at {} ({}) on {} {} was cancelled.</p>
        <p>A refund of {} {} has been issued.</p>
    </body>
    </html>
    """,
        booking.user.full_name or booking.user.email,
        booking.venue.name,
        booking.court_name,
        booking.date.strftime("%d.%m.%Y"),
        str(booking.time_slot),
        booking.total_price,
        settings.QUICKCOURT_CURRENCY,
    )

    return send_email_notification(
        recipient_email=booking.user.email,
        subject=f"Booking #{booking.id} cancelled",
        html_message=html_message,
    )


def send_new_booking_to_owner_email(booking: "Booking") -> bool:
    """New-booking notice for the facility owner."""
    owner = booking.venue.owner
    html_message = format_html(
        """
    <html>
    <body>
        <h2>Hello, {}!</h2>
        <p>You have a new booking.</p>
        <ul>
            <li><strong>Court:</strong> {}</li>
            <li><strong>Player:</strong> {} ({})</li>
            <li><strong>Date:</strong> {} {}</li>
            <li><strong>Earnings:</strong> {} {}</li>
        </ul>
    </body>
    </html>
    """,
        owner.full_name or owner.email,
        booking.court_name,
        booking.user.full_name,
        booking.user.email,
        booking.date.strftime("%d.%m.%Y"),
        str(booking.time_slot),
        booking.total_price,
        settings.QUICKCOURT_CURRENCY,
    )

    return send_email_notification(
        recipient_email=owner.email,
        subject=f"New booking #{booking.id} at {booking.venue.name}",
        html_message=html_message,
    )


def send_venue_status_email(venue: "Venue") -> bool:
    """Approval or rejection notice for the venue owner."""
    owner = venue.owner
    if venue.status == venue.Status.APPROVED:
        body = format_html(
            "<p>Your venue <strong>{}</strong> has been approved and is now listed.</p>",
            venue.name,
        )
    else:
        body = format_html(
            "<p>Your venue <strong>{}</strong> was rejected.</p><p>Reason: {}</p>",
            venue.name,
            venue.rejection_reason or "No reason given.",
        )

    html_message = format_html(
        """
    <html>
    <body>
        <h2>Hello, {}!</h2>
        {}
    </body>
    </html>
    """,
        owner.full_name or owner.email,
        body,
    )

    return send_email_notification(
        recipient_email=owner.email,
        subject=f"Venue {venue.get_status_display().lower()}: {venue.name}",
        html_message=html_message,
    )
