"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User
from apps.users.tasks import purge_expired_otps


class AuthAPITests(APITestCase):
    def _signup(self, **overrides):
        payload = {
            "full_name": "Asha Player",
            "email": "Asha@Example.com",
            "password": "StrongPass123",
        }
        payload.update(overrides)
        return self.client.post(reverse("auth:signup"), payload, format="json")

    def test_signup_creates_unverified_user_and_sends_otp(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            response = self._signup()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["email"], "asha@example.com")
        user = User.objects.get(email="asha@example.com")
        self.assertFalse(user.is_verified)
        self.assertEqual(user.role, User.Role.USER)
        self.assertEqual(len(user.otp_code), 6)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(user.otp_code, mail.outbox[0].body)

    def test_signup_as_owner(self) -> None:
        response = self._signup(role="owner")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(User.objects.get().role, User.Role.OWNER)

    def test_signup_cannot_claim_admin_role(self) -> None:
        response = self._signup(role="admin")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.exists())

    def test_signup_rejects_duplicate_email(self) -> None:
        User.objects.create_user(email="asha@example.com", password="StrongPass123", full_name="Asha")

        response = self._signup()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_signup_rejects_short_password(self) -> None:
        response = self._signup(password="abc")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_verify_otp_returns_tokens(self) -> None:
        self._signup()
        user = User.objects.get()

        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": user.email, "otp": user.otp_code},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data["tokens"])
        user.refresh_from_db()
        self.assertTrue(user.is_verified)
        self.assertEqual(user.otp_code, "")

    def test_verify_otp_rejects_wrong_code(self) -> None:
        self._signup()
        user = User.objects.get()
        wrong = "000000" if user.otp_code != "000000" else "111111"

        response = self.client.post(reverse("auth:verify-otp"), {"email": user.email, "otp": wrong}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        user.refresh_from_db()
        self.assertFalse(user.is_verified)

    def test_verify_otp_rejects_non_ascii_digits(self) -> None:
        self._signup()
        user = User.objects.get()

        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": user.email, "otp": "١٢٣٤٥٦"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("otp", response.data)
        user.refresh_from_db()
        self.assertFalse(user.is_verified)

    def test_verify_otp_rejects_expired_code(self) -> None:
        self._signup()
        user = User.objects.get()
        user.otp_expires_at = timezone.now() - timedelta(minutes=1)
        user.save(update_fields=["otp_expires_at"])

        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": user.email, "otp": user.otp_code},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_verify_otp_for_unknown_email(self) -> None:
        response = self.client.post(
            reverse("auth:verify-otp"),
            {"email": "ghost@example.com", "otp": "123456"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_resend_otp_issues_new_code(self) -> None:
        self._signup()
        user = User.objects.get()
        user.otp_expires_at = timezone.now() - timedelta(minutes=1)
        user.save(update_fields=["otp_expires_at"])

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(reverse("auth:resend-otp"), {"email": user.email}, format="json")

        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED, response.data)
        user.refresh_from_db()
        self.assertFalse(user.otp_is_expired)
        self.assertEqual(len(mail.outbox), 1)

    def test_login_requires_verified_email(self) -> None:
        User.objects.create_user(email="asha@example.com", password="StrongPass123", full_name="Asha")

        response = self.client.post(
            reverse("auth:login"),
            {"email": "asha@example.com", "password": "StrongPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data["detail"][0]), "Please verify your email first.")

    def test_login_returns_tokens(self) -> None:
        User.objects.create_user(
            email="asha@example.com",
            password="StrongPass123",
            full_name="Asha",
            is_verified=True,
        )

        response = self.client.post(
            reverse("auth:login"),
            {"email": "ASHA@example.com", "password": "StrongPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["user"]["email"], "asha@example.com")
        self.assertIn("refresh", response.data["tokens"])

    def test_login_rejects_suspended_account(self) -> None:
        User.objects.create_user(
            email="asha@example.com",
            password="StrongPass123",
            full_name="Asha",
            is_verified=True,
            is_active=False,
        )

        response = self.client.post(
            reverse("auth:login"),
            {"email": "asha@example.com", "password": "StrongPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_rejects_wrong_password(self) -> None:
        User.objects.create_user(
            email="asha@example.com",
            password="StrongPass123",
            full_name="Asha",
            is_verified=True,
        )

        response = self.client.post(
            reverse("auth:login"),
            {"email": "asha@example.com", "password": "WrongPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ProfileAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="asha@example.com",
            password="StrongPass123",
            full_name="Asha",
            is_verified=True,
        )

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_updates_profile(self) -> None:
        self.client.force_authenticate(self.user)

        response = self.client.patch(
            reverse("user-me"),
            {"full_name": "Asha Kulkarni", "role": "admin"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["full_name"], "Asha Kulkarni")
        self.assertEqual(response.data["role"], User.Role.USER)


class OTPHousekeepingTests(APITestCase):
    def test_purge_clears_only_expired_codes(self) -> None:
        expired = User.objects.create_user(email="old@example.com", password="StrongPass123", full_name="Old")
        fresh = User.objects.create_user(email="new@example.com", password="StrongPass123", full_name="New")
        expired.generate_otp()
        fresh.generate_otp()
        User.objects.filter(pk=expired.pk).update(otp_expires_at=timezone.now() - timedelta(hours=1))

        result = purge_expired_otps()

        self.assertEqual(result, {"purged": 1})
        expired.refresh_from_db()
        fresh.refresh_from_db()
        self.assertEqual(expired.otp_code, "")
        self.assertNotEqual(fresh.otp_code, "")
