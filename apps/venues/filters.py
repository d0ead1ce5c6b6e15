"""FilterSet definitions for venue discovery."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Court, Venue


class VenueFilterSet(django_filters.FilterSet):
    """Filters used by the public venue list."""

    sport = django_filters.CharFilter(method="filter_sport")
    city = django_filters.CharFilter(field_name="address_city", lookup_expr="icontains")
    # Each bound matches independently: a venue qualifies when some court is
    # above the minimum and some court is below the maximum.
    min_price = django_filters.NumberFilter(method="filter_min_price")
    max_price = django_filters.NumberFilter(method="filter_max_price")

    class Meta:
        model = Venue
        fields = ["sport", "city"]

    def filter_sport(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(
            Q(sports__icontains=value) | Q(courts__sport_type__iexact=value)
        ).distinct()

    def filter_min_price(self, queryset, name, value):  # type: ignore
        venue_ids = Court.objects.filter(price_per_hour__gte=value).values("venue_id")
        return queryset.filter(id__in=venue_ids)

    def filter_max_price(self, queryset, name, value):  # type: ignore
        venue_ids = Court.objects.filter(price_per_hour__lte=value).values("venue_id")
        return queryset.filter(id__in=venue_ids)
