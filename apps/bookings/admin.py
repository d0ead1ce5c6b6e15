"""Admin registrations for bookings domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "venue",
        "court_name",
        "date",
        "start_time",
        "end_time",
        "status",
        "payment_status",
        "total_price",
    )
    list_filter = ("status", "payment_status", "date", "court_sport_type")
    search_fields = ("user__email", "venue__name", "court_name")
    readonly_fields = (
        "court_name",
        "court_sport_type",
        "total_price",
        "created_at",
        "updated_at",
    )
    date_hierarchy = "date"
