"""Serializers for the platform admin API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.models import CustomUser
from apps.venues.models import Venue


class AdminUserSerializer(serializers.ModelSerializer):
    """User row in the admin user list."""

    role_display = serializers.CharField(source="get_role_display", read_only=True)
    bookings_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            "id",
            "email",
            "full_name",
            "role",
            "role_display",
            "avatar",
            "is_active",
            "is_verified",
            "bookings_count",
            "created_at",
        ]
        read_only_fields = fields


class UserStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class VenueStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[Venue.Status.APPROVED, Venue.Status.REJECTED])
    rejection_reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
