"""Venue domain models for QuickCourt.

A venue is a sports facility listed by a facility owner. It becomes
visible to players once a platform admin approves it. Each venue offers
one or more courts with their own sport, hourly price and operating hours.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class VenueQuerySet(models.QuerySet):
    def approved(self):
        return self.filter(status=Venue.Status.APPROVED)

    def visible_to(self, user):  # type: ignore
        """Approved venues, plus the caller's own listings; admins see all."""
        if not user.is_authenticated:
            return self.approved()
        if user.is_admin():
            return self
        return self.filter(models.Q(status=Venue.Status.APPROVED) | models.Q(owner=user))


class Venue(models.Model):
    """Sports facility listed on the marketplace."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="venues",
    )
    name = models.CharField(max_length=200)
    description = models.TextField()
    address_street = models.CharField(max_length=255, blank=True)
    address_city = models.CharField(max_length=100, blank=True, db_index=True)
    address_state = models.CharField(max_length=100, blank=True)
    address_zip_code = models.CharField(max_length=20, blank=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    sports = models.JSONField(default=list, help_text=_("Sports offered, e.g. [\"badminton\", \"tennis\"]."))
    amenities = models.JSONField(default=list, blank=True)
    photos = models.JSONField(default=list, blank=True, help_text=_("Photo URLs."))
    rating_average = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    rating_count = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
    )
    rejection_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = VenueQuerySet.as_manager()

    class Meta:
        verbose_name = _("Venue")
        verbose_name_plural = _("Venues")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "-created_at"], name="venue_status_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.address_city})"

    @property
    def is_approved(self) -> bool:
        return self.status == self.Status.APPROVED

    @property
    def address(self) -> dict[str, object]:
        return {
            "street": self.address_street,
            "city": self.address_city,
            "state": self.address_state,
            "zip_code": self.address_zip_code,
            "coordinates": {
                "lat": float(self.latitude) if self.latitude is not None else None,
                "lng": float(self.longitude) if self.longitude is not None else None,
            },
        }

    def is_managed_by(self, user) -> bool:  # type: ignore
        return bool(user.is_authenticated and (self.owner_id == user.id or user.is_admin()))

    def refresh_rating(self) -> None:
        """Recompute the average and count from stored reviews."""
        stats = self.reviews.aggregate(avg=models.Avg("rating"), count=models.Count("id"))
        self.rating_average = Decimal(str(round(stats["avg"] or 0, 2)))
        self.rating_count = stats["count"]
        self.save(update_fields=["rating_average", "rating_count", "updated_at"])


class Court(models.Model):
    """Bookable playing surface inside a venue."""

    venue = models.ForeignKey(
        Venue,
        on_delete=models.CASCADE,
        related_name="courts",
    )
    name = models.CharField(max_length=100)
    sport_type = models.CharField(max_length=50)
    price_per_hour = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    opens_at = models.TimeField(help_text=_("Start of operating hours."))
    closes_at = models.TimeField(help_text=_("End of operating hours."))
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Court")
        verbose_name_plural = _("Courts")
        ordering = ["venue_id", "name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(closes_at__gt=models.F("opens_at")),
                name="court_valid_operating_hours",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.sport_type}) at venue {self.venue_id}"
