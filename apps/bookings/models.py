"""Booking domain models for QuickCourt."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeSlot


class Booking(models.Model):
    """Reservation of one court for a time slot on a calendar day.

    The court's name and sport are copied onto the booking when it is made,
    so later edits to the court never rewrite booking history.
    """

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        COMPLETED = "completed", _("Completed")
        REFUNDED = "refunded", _("Refunded")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    venue = models.ForeignKey(
        "venues.Venue",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    court = models.ForeignKey(
        "venues.Court",
        on_delete=models.PROTECT,
        related_name="bookings",
        help_text=_("Courts with bookings cannot be deleted; deactivate them instead."),
    )
    court_name = models.CharField(max_length=100)
    court_sport_type = models.CharField(max_length=50)
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    duration = models.PositiveSmallIntegerField(help_text=_("Length in whole hours."))
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Court hourly price times duration, fixed at booking time."),
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-date", "-start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_valid_time_slot",
            ),
            models.UniqueConstraint(
                fields=["court", "date", "start_time"],
                condition=models.Q(status="confirmed"),
                name="booking_unique_confirmed_start",
            ),
        ]
        indexes = [
            models.Index(fields=["venue", "court", "date"], name="booking_venue_court_date_idx"),
            models.Index(fields=["user", "-date"], name="booking_user_date_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.court_name} {self.date} {self.time_slot}"

    @property
    def time_slot(self) -> TimeSlot:
        return TimeSlot(self.start_time, self.end_time)

    @property
    def starts_at(self) -> datetime:
        """Aware datetime of the slot start in the venue time zone."""
        return timezone.make_aware(
            self.time_slot.starts_at(self.date),
            timezone.get_default_timezone(),
        )

    @property
    def has_started(self) -> bool:
        return timezone.now() >= self.starts_at

    def can_be_completed_by(self, user) -> bool:  # type: ignore
        return self.user_id == user.id or self.venue.owner_id == user.id

    def is_visible_to(self, user) -> bool:  # type: ignore
        return self.can_be_completed_by(user) or user.is_admin()
