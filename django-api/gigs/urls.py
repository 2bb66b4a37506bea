from django.urls import path

from gigs.handlers import (
    ArtistAvailabilityView,
    ArtistDetailView,
    BookingDetailView,
    BookingListView,
    BookingStatusView,
    EventDetailView,
    EventListView,
    EventStatusView,
    SlotBatchView,
    SlotDetailView,
    SlotListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path("events/<str:event_id>/slots", SlotListView.as_view(), name="slot-list"),
    path("events/<str:event_id>/slots/batch", SlotBatchView.as_view(), name="slot-batch"),
    path(
        "events/<str:event_id>/slots/<int:index>",
        SlotDetailView.as_view(),
        name="slot-detail",
    ),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path("bookings/<str:booking_id>/status", BookingStatusView.as_view(), name="booking-status"),
    path("artists/<str:artist_id>", ArtistDetailView.as_view(), name="artist-detail"),
    path(
        "artists/<str:artist_id>/availability",
        ArtistAvailabilityView.as_view(),
        name="artist-availability",
    ),
]
