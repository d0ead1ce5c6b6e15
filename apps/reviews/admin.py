"""Admin registrations for reviews domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("venue", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("venue__name", "user__email", "comment")
    readonly_fields = ("created_at", "updated_at")
