"""Tests for shared value objects."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from shared.domain.value_objects import Money, TimeSlot, format_wall_time, parse_wall_time


def test_money_multiplies_and_rounds_to_paise() -> None:
    assert (Money(Decimal("333.335")) * 2).amount == Decimal("666.67")
    assert (Money(Decimal("500")) * 3) == Money(Decimal("1500.00"))


def test_money_rejects_negative_amount() -> None:
    with pytest.raises(ValueError):
        Money(Decimal("-1"))


@pytest.mark.parametrize("raw, expected", [("9:05", time(9, 5)), ("18:00", time(18, 0)), ("23:59", time(23, 59))])
def test_parse_wall_time(raw: str, expected: time) -> None:
    assert parse_wall_time(raw) == expected


@pytest.mark.parametrize("raw", ["24:00", "18:60", "1800", "", "18:00:00"])
def test_parse_wall_time_rejects_bad_input(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_wall_time(raw)


def test_format_wall_time_pads_hours() -> None:
    assert format_wall_time(time(7, 0)) == "07:00"


def test_time_slot_requires_start_before_end() -> None:
    with pytest.raises(ValueError):
        TimeSlot(time(19, 0), time(18, 0))
    with pytest.raises(ValueError):
        TimeSlot(time(18, 0), time(18, 0))


def test_time_slot_overlap_is_half_open() -> None:
    booked = TimeSlot.parse("18:00", "19:00")

    assert booked.overlaps_with(TimeSlot.parse("18:30", "19:30"))
    assert booked.overlaps_with(TimeSlot.parse("17:00", "20:00"))
    assert not booked.overlaps_with(TimeSlot.parse("19:00", "20:00"))
    assert not booked.overlaps_with(TimeSlot.parse("17:00", "18:00"))


def test_time_slot_length_helpers() -> None:
    slot = TimeSlot.parse("09:00", "11:00")

    assert slot.minutes == 120
    assert slot.spans_hours(2)
    assert not TimeSlot.parse("09:30", "11:00").spans_hours(1)
    assert slot.starts_at(date(2030, 6, 1)) == datetime(2030, 6, 1, 9, 0)
    assert str(slot) == "09:00-11:00"
    assert slot.as_dict() == {"start": "09:00", "end": "11:00"}


def test_hourly_slots_fit_inside_operating_hours() -> None:
    slots = list(TimeSlot.hourly(time(6, 0), time(9, 30)))

    assert [str(s) for s in slots] == ["06:00-07:00", "07:00-08:00", "08:00-09:00"]


def test_hourly_slots_reach_midnight_edge() -> None:
    slots = list(TimeSlot.hourly(time(22, 0), time(23, 59)))

    assert [str(s) for s in slots] == ["22:00-23:00"]
