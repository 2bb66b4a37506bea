"""Service wiring.

BookingService and SlotService depend on each other through the slot
synchronizer; ``build_engine`` ties the knot after construction.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from gigs.domain.models import utcnow
from gigs.services.artist_service import ArtistService
from gigs.services.booking_service import BookingService
from gigs.services.budget import BudgetValidator
from gigs.services.event_service import EventService
from gigs.services.slot_service import SlotService
from gigs.services.slot_sync import SlotSynchronizer
from gigs.stores.interfaces import ArtistStore, BookingStore, EventStore


@dataclass(frozen=True)
class Engine:
    artists: ArtistService
    events: EventService
    slots: SlotService
    bookings: BookingService
    budget: BudgetValidator
    synchronizer: SlotSynchronizer


def build_engine(
    events: EventStore,
    bookings: BookingStore,
    artists: ArtistStore,
    clock: Callable[[], datetime] = utcnow,
) -> Engine:
    budget = BudgetValidator(artists)
    booking_service = BookingService(bookings, events, artists, clock=clock)
    slot_service = SlotService(events, artists, budget, booking_service)
    synchronizer = SlotSynchronizer(events, slot_service)
    booking_service.bind_synchronizer(synchronizer)
    return Engine(
        artists=ArtistService(artists),
        events=EventService(events, artists, budget, clock=clock),
        slots=slot_service,
        bookings=booking_service,
        budget=budget,
        synchronizer=synchronizer,
    )


__all__ = [
    "ArtistService",
    "BookingService",
    "BudgetValidator",
    "Engine",
    "EventService",
    "SlotService",
    "SlotSynchronizer",
    "build_engine",
]
