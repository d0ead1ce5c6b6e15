"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    """Short user info embedded in booking and review payloads."""

    class Meta:
        model = User
        fields = ["id", "full_name", "email"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "role",
            "avatar",
            "is_verified",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "is_verified",
            "is_active",
            "created_at",
            "updated_at",
        ]


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may change on their own profile."""

    full_name = serializers.CharField(min_length=2, max_length=50, required=False)

    class Meta:
        model = User
        fields = ["full_name", "avatar"]
        extra_kwargs = {"avatar": {"required": False, "allow_blank": True}}
