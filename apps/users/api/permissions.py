"""Permission classes for the platform admin API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsPlatformAdmin(permissions.BasePermission):
    """
    Permission class that only allows platform admins to access.

    A platform admin is a user with role='admin' or a Django staff or
    superuser account.
    """

    message = "Access denied. Admin required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        return bool(user.is_authenticated and user.is_admin())
