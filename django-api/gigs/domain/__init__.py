from gigs.domain.models import (
    Actor,
    Artist,
    ArtistRef,
    ArtistSlot,
    ArtistStatus,
    Availability,
    Booking,
    BookingStatus,
    Event,
    EventStatus,
    Payment,
    Pricing,
    Resolved,
    Role,
    SlotRole,
    SlotStatus,
    StatusChange,
    Unresolved,
)
from gigs.domain.value_objects import ArtistId, BookingId, EventId, Money, SlotId, UserId

__all__ = [
    "Actor",
    "Artist",
    "ArtistRef",
    "ArtistSlot",
    "ArtistStatus",
    "Availability",
    "Booking",
    "BookingStatus",
    "Event",
    "EventStatus",
    "Payment",
    "Pricing",
    "Resolved",
    "Role",
    "SlotRole",
    "SlotStatus",
    "StatusChange",
    "Unresolved",
    "ArtistId",
    "BookingId",
    "EventId",
    "SlotId",
    "UserId",
    "Money",
]
