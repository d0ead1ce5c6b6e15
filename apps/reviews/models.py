"""Models for the review domain.

Defines the ``Review`` entity representing feedback and ratings
submitted by players for venues they have played at. Each review
includes a numerical rating, a comment and timestamps.
One review is allowed per completed booking.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Represents a review left by a player for a venue."""

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='reviews'
    )
    venue = models.ForeignKey(
        'venues.Venue', on_delete=models.CASCADE, related_name='reviews'
    )
    booking = models.OneToOneField(
        'bookings.Booking',
        on_delete=models.CASCADE,
        related_name='review',
        help_text=_('Completed booking the review is about'),
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Rating from 1 to 5'),
    )
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['venue', '-created_at'], name='review_venue_created_idx'),
            models.Index(fields=['user'], name='review_user_idx'),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for venue {self.venue_id} (Rating: {self.rating})"
