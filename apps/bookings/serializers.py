"""Serializers for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSummarySerializer
from shared.domain.value_objects import TIME_PATTERN, TimeSlot, format_wall_time, parse_wall_time

from .models import Booking
from .services import reserve_slot


class WallTimeField(serializers.Field):
    """``H:MM``/``HH:MM`` 24-hour time, always rendered as ``HH:MM``."""

    default_error_messages = {"invalid": "Time must be in HH:MM format."}

    def to_internal_value(self, data):  # type: ignore
        if not isinstance(data, str) or not TIME_PATTERN.match(data):
            self.fail("invalid")
        return parse_wall_time(data)

    def to_representation(self, value):  # type: ignore
        return format_wall_time(value)


class TimeSlotSerializer(serializers.Serializer):
    start = WallTimeField()
    end = WallTimeField()

    def validate(self, attrs):  # type: ignore
        if attrs["end"] <= attrs["start"]:
            raise serializers.ValidationError({"end": "End time must be after start time."})
        return attrs


class BookingCreateSerializer(serializers.Serializer):
    """Booking request from a player."""

    venue_id = serializers.IntegerField(min_value=1)
    court_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    time_slot = TimeSlotSerializer()
    duration = serializers.IntegerField(
        min_value=settings.QUICKCOURT_MIN_BOOKING_HOURS,
        max_value=settings.QUICKCOURT_MAX_BOOKING_HOURS,
    )

    def validate(self, attrs):  # type: ignore
        slot = TimeSlot(attrs["time_slot"]["start"], attrs["time_slot"]["end"])
        if not slot.spans_hours(attrs["duration"]):
            raise serializers.ValidationError({"duration": "Duration must match the time slot length in hours."})
        attrs["slot"] = slot
        return attrs

    def create(self, validated_data):  # type: ignore
        return reserve_slot(
            user=self.context["request"].user,
            venue_id=validated_data["venue_id"],
            court_id=validated_data["court_id"],
            booking_date=validated_data["date"],
            slot=validated_data["slot"],
            duration=validated_data["duration"],
        )


class BookingCancelSerializer(serializers.Serializer):
    cancellation_reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class BookingSerializer(serializers.ModelSerializer):
    """Booking with the display fields players and owners need."""

    user = UserSummarySerializer(read_only=True)
    venue = serializers.SerializerMethodField()
    court = serializers.SerializerMethodField()
    time_slot = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user",
            "venue",
            "court",
            "date",
            "time_slot",
            "duration",
            "total_price",
            "status",
            "payment_status",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_venue(self, obj: Booking) -> dict[str, object]:
        return {"id": obj.venue_id, "name": obj.venue.name, "address": obj.venue.address}

    def get_court(self, obj: Booking) -> dict[str, object]:
        return {"court_id": obj.court_id, "name": obj.court_name, "sport_type": obj.court_sport_type}

    def get_time_slot(self, obj: Booking) -> dict[str, str]:
        return obj.time_slot.as_dict()


class VenueAnalyticsQuerySerializer(serializers.Serializer):
    period = serializers.IntegerField(min_value=1, max_value=365, default=30)


class VenueBookingsQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    date = serializers.DateField(required=False)
