from gigs.handlers.metrics import metrics_view
from gigs.handlers.views import (
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

__all__ = [
    "ArtistAvailabilityView",
    "ArtistDetailView",
    "BookingDetailView",
    "BookingListView",
    "BookingStatusView",
    "EventDetailView",
    "EventListView",
    "EventStatusView",
    "SlotBatchView",
    "SlotDetailView",
    "SlotListView",
    "metrics_view",
]
