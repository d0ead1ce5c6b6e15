"""Serializers for authentication flows (signup, OTP verification, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.password_validation import validate_password  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore

User = get_user_model()


def _get_user_by_email(email: str):  # type: ignore
    try:
        return User.objects.get(email__iexact=email)
    except User.DoesNotExist:
        raise NotFound("User not found.")


class SignupSerializer(serializers.Serializer):
    full_name = serializers.CharField(min_length=2, max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    role = serializers.ChoiceField(
        choices=[User.Role.USER, User.Role.OWNER],
        default=User.Role.USER,
    )

    def validate_email(self, value: str) -> str:
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists with this email.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        validate_password(attrs["password"], user=User(email=attrs["email"], full_name=attrs["full_name"]))
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        user = User.objects.create_user(password=password, **validated_data)
        user.generate_otp()
        return user


class VerifyOTPSerializer(serializers.Serializer):
    email = serializers.EmailField()
    otp = serializers.RegexField(r"^[0-9]{6}$", error_messages={"invalid": "OTP must be 6 digits."})

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = _get_user_by_email(attrs["email"])
        if user.is_verified:
            raise serializers.ValidationError({"detail": "User already verified."})
        if not user.verify_otp(attrs["otp"]):
            raise serializers.ValidationError({"otp": "Invalid or expired OTP."})
        attrs["user"] = user
        return attrs

    def save(self, **kwargs):  # type: ignore
        user = self.validated_data["user"]
        user.mark_verified()
        return user


class ResendOTPSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = _get_user_by_email(attrs["email"])
        if user.is_verified:
            raise serializers.ValidationError({"detail": "User already verified."})
        attrs["user"] = user
        return attrs

    def save(self, **kwargs):  # type: ignore
        user = self.validated_data["user"]
        user.generate_otp()
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError({"detail": "Invalid credentials."})

        if not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"detail": "Invalid credentials."})
        if not user.is_verified:
            raise serializers.ValidationError({"detail": "Please verify your email first."})
        if not user.is_active:
            raise serializers.ValidationError({"detail": "Account has been suspended."})

        attrs["user"] = user
        return attrs
