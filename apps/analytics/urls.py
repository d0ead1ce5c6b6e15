"""URL routing for platform reports."""

from django.urls import path  # type: ignore

from .views import BookingTrendsReportView, OverviewReportView


urlpatterns = [
    # Mounted under api/v1/reports/ in config.urls
    path("overview/", OverviewReportView.as_view(), name="reports-overview"),
    path("booking-trends/", BookingTrendsReportView.as_view(), name="reports-booking-trends"),
]
