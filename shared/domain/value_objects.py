"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts with currency
- TimeSlot: Represents a half-open [start, end) range of wall-clock time
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterator

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


@dataclass(frozen=True)
class ValueObject:
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a monetary amount with currency.
    Immutable and supports the arithmetic pricing needs.
    """
    amount: Decimal
    currency: str = 'INR'

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not self.currency:
            raise ValueError("Currency is required")

    def __mul__(self, factor: int | Decimal) -> 'Money':
        """Multiply money by a factor"""
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money((self.amount * Decimal(factor)).quantize(Decimal("0.01")), self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


def parse_wall_time(value: str) -> time:
    """Parse an ``H:MM`` or ``HH:MM`` 24-hour string into a ``time``."""

    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError(f"Invalid time format: {value!r} (expected HH:MM)")
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def format_wall_time(value: time) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class TimeSlot(ValueObject):
    """
    Time slot value object

    Represents a range from start (inclusive) to end (exclusive) within a
    single calendar day. Used for court reservations and availability grids.
    """
    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time ({self.start:%H:%M}) must be before end time ({self.end:%H:%M})")

    @classmethod
    def parse(cls, start: str, end: str) -> 'TimeSlot':
        return cls(parse_wall_time(start), parse_wall_time(end))

    def overlaps_with(self, other: 'TimeSlot') -> bool:
        """
        Check if this slot overlaps with another

        Note: end is exclusive, so abutting slots don't overlap.

        Examples:
            - 18:00-19:00 overlaps with 18:30-19:30 -> True
            - 18:00-19:00 overlaps with 19:00-20:00 -> False (adjacent)
        """
        if not isinstance(other, TimeSlot):
            raise TypeError("Can only check overlap with another TimeSlot")

        return self.start < other.end and self.end > other.start

    @property
    def minutes(self) -> int:
        return (self.end.hour * 60 + self.end.minute) - (self.start.hour * 60 + self.start.minute)

    def spans_hours(self, hours: int) -> bool:
        """True when the slot is exactly ``hours`` long."""
        return self.minutes == hours * 60

    def starts_at(self, on: date) -> datetime:
        """Naive datetime of the slot start on the given day."""
        return datetime.combine(on, self.start)

    @classmethod
    def hourly(cls, opens_at: time, closes_at: time) -> Iterator['TimeSlot']:
        """Yield consecutive one-hour slots between opening and closing."""
        cursor = datetime.combine(date.min, opens_at)
        closing = datetime.combine(date.min, closes_at)
        while cursor + timedelta(hours=1) <= closing:
            following = cursor + timedelta(hours=1)
            yield cls(cursor.time(), following.time())
            cursor = following

    def as_dict(self) -> dict[str, str]:
        return {"start": format_wall_time(self.start), "end": format_wall_time(self.end)}

    def __str__(self):
        return f"{self.start:%H:%M}-{self.end:%H:%M}"

    def __repr__(self):
        return f"TimeSlot({self.start:%H:%M}, {self.end:%H:%M})"
