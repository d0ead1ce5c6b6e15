"""Admin registrations for venues domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Court, Venue


class CourtInline(admin.TabularInline):
    model = Court
    extra = 0
    fields = ("name", "sport_type", "price_per_hour", "opens_at", "closes_at", "is_active")


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "address_city",
        "owner",
        "status",
        "rating_average",
        "rating_count",
        "created_at",
    )
    list_filter = ("status", "address_city")
    search_fields = ("name", "description", "address_city", "owner__email")
    readonly_fields = ("rating_average", "rating_count", "created_at", "updated_at")
    inlines = [CourtInline]


@admin.register(Court)
class CourtAdmin(admin.ModelAdmin):
    list_display = ("name", "venue", "sport_type", "price_per_hour", "opens_at", "closes_at", "is_active")
    list_filter = ("sport_type", "is_active")
    search_fields = ("name", "venue__name")
