"""URL routing for the reviews domain (mounted under the venues prefix)."""

from django.urls import path  # type: ignore

from .views import VenueReviewListCreateView

urlpatterns = [
    path('<int:venue_id>/reviews/', VenueReviewListCreateView.as_view(), name='venue-reviews'),
]
