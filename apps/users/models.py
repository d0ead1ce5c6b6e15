"""User domain models for QuickCourt.

The platform differentiates three roles (player, facility owner, platform
admin). Accounts log in by email and must confirm it with a one-time code
before they can sign in.
"""

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(BaseUserManager):
    """User manager that uses email as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email).lower()

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.Role.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.Role.ADMIN)
        extra_fields.setdefault("is_verified", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Platform account with a role and email verification state."""

    class Role(models.TextChoices):
        USER = "user", _("User")
        OWNER = "owner", _("Facility owner")
        ADMIN = "admin", _("Admin")

    username = None  # type: ignore[assignment]
    first_name = None  # type: ignore[assignment]
    last_name = None  # type: ignore[assignment]

    email = models.EmailField(_("Email"), unique=True)
    full_name = models.CharField(_("Full name"), max_length=50)
    role = models.CharField(
        _("Role"),
        max_length=10,
        choices=Role.choices,
        default=Role.USER,
    )
    avatar = models.URLField(_("Avatar URL"), max_length=500, blank=True)
    is_verified = models.BooleanField(_("Email verified"), default=False)
    otp_code = models.CharField(max_length=6, blank=True)
    otp_expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def get_full_name(self) -> str:
        return self.full_name

    def get_short_name(self) -> str:
        return self.full_name.split(" ")[0] if self.full_name else self.email

    # --- Role predicates ----------------------------------------------------
    def is_owner(self) -> bool:
        return self.role == self.Role.OWNER

    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_staff or self.is_superuser

    # --- One-time codes -----------------------------------------------------
    def generate_otp(self) -> str:
        """Issue a fresh 6-digit code and persist it with its expiry."""
        self.otp_code = f"{secrets.randbelow(1_000_000):06d}"
        self.otp_expires_at = timezone.now() + timedelta(minutes=settings.QUICKCOURT_OTP_TTL_MINUTES)
        self.save(update_fields=["otp_code", "otp_expires_at", "updated_at"])
        return self.otp_code

    @property
    def otp_is_expired(self) -> bool:
        return not self.otp_expires_at or timezone.now() >= self.otp_expires_at

    def verify_otp(self, code: str) -> bool:
        return bool(self.otp_code) and not self.otp_is_expired and secrets.compare_digest(self.otp_code, code)

    def mark_verified(self) -> None:
        self.is_verified = True
        self.otp_code = ""
        self.otp_expires_at = None
        self.save(update_fields=["is_verified", "otp_code", "otp_expires_at", "updated_at"])


# Short alias used in tests and other modules
User = CustomUser
