"""Views for authentication flows (signup, OTP verification, login, token refresh)."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.utils.decorators import method_decorator  # type: ignore
from django_ratelimit.decorators import ratelimit  # type: ignore
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import (
    LoginSerializer,
    ResendOTPSerializer,
    SignupSerializer,
    VerifyOTPSerializer,
)
from .serializers import UserSerializer
from .tasks import send_signup_otp

logger = logging.getLogger(__name__)

auth_ratelimit = method_decorator(
    ratelimit(key="ip", rate=settings.QUICKCOURT_AUTH_RATE, method="POST", block=True),
    name="post",
)


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


def _queue_otp_email(user) -> None:
    transaction.on_commit(lambda: send_signup_otp.delay(user.id))


@auth_ratelimit
class SignupView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        _queue_otp_email(user)
        logger.info(f"User {user.id} signed up as {user.role}")
        return Response(
            {
                "detail": "User registered successfully. Please verify your email with the OTP sent.",
                "user_id": user.id,
                "email": user.email,
            },
            status=status.HTTP_201_CREATED,
        )


@auth_ratelimit
class VerifyOTPView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = VerifyOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User {user.id} verified email")
        data = {
            "detail": "Email verified successfully.",
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)


@auth_ratelimit
class ResendOTPView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = ResendOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        _queue_otp_email(user)
        return Response({"detail": "OTP sent successfully."}, status=status.HTTP_202_ACCEPTED)


@auth_ratelimit
class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)
