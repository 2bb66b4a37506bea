"""Reflects booking status changes onto the originating event slot."""

import logging

from gigs.domain import Booking, SlotStatus
from gigs.domain.transitions import slot_status_for
from gigs.services.slot_service import SlotService
from gigs.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class SlotSynchronizer:
    """Best-effort propagation of booking status to slot status.

    Errors raised here are the caller's to log; BookingService swallows and
    counts them so a booking update never fails because of its slot.
    """

    def __init__(self, events: EventStore, slots: SlotService) -> None:
        self._events = events
        self._slots = slots

    def sync(self, booking: Booking) -> SlotStatus | None:
        """Update the matching slot and return its new status, or None if no slot matches."""
        event = self._events.get(booking.event_id)
        if event is None:
            logger.debug("Event %s gone; nothing to sync for booking %s", booking.event_id, booking.id)
            return None

        index = event.index_of_artist(booking.artist_id)
        if index is None:
            logger.debug("No slot for artist %s on event %s", booking.artist_id, event.id)
            return None

        status = slot_status_for(booking.status)
        self._slots.update_slot_status_only(event.id, event.artist_slots[index].id, status)
        logger.debug("Slot %d of event %s now %s", index, event.id, status.value)
        return status
