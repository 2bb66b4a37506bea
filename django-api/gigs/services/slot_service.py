"""Artist slot management for events.

Slots are addressed by position at the service boundary. Internally every
slot carries a stable SlotId, and compensating writes locate their slot by
that id on a fresh read, so a concurrent removal that shifts indices cannot
make them touch the wrong slot.
"""

import logging
from dataclasses import dataclass, replace

from gigs.domain import (
    Actor,
    Artist,
    ArtistId,
    ArtistRef,
    ArtistSlot,
    BookingStatus,
    Event,
    EventId,
    SlotId,
    SlotRole,
    SlotStatus,
    Unresolved,
)
from gigs.domain.errors import (
    ArtistNotActiveError,
    ArtistNotFoundError,
    DuplicateArtistError,
    EventNotFoundError,
    ForbiddenError,
    SlotNotFoundError,
)
from gigs.services.booking_service import BookingDraft, BookingService
from gigs.services.budget import BudgetValidator
from gigs.stores.interfaces import ArtistStore, EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotDraft:
    role: str
    artist: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class SlotUpdate:
    artist: str | None = None
    status: str | None = None


class SlotService:
    """Owns an event's ordered artist slots."""

    def __init__(
        self,
        events: EventStore,
        artists: ArtistStore,
        budget: BudgetValidator,
        bookings: BookingService,
    ) -> None:
        self._events = events
        self._artists = artists
        self._budget = budget
        self._bookings = bookings

    def add_slot(self, event_id: str | EventId, draft: SlotDraft, actor: Actor) -> Event:
        """Append a slot; an assigned artist also gets a booking request.

        If the booking cannot be created the slot is removed again before the
        error propagates, so no artist slot is left without a booking.
        """
        event = self._editable_event(event_id, actor)
        role = SlotRole.parse(draft.role)
        status = SlotStatus.parse(draft.status) if draft.status else SlotStatus.UNFILLED

        artist = None
        if draft.artist:
            artist = self._bookable_artist(ArtistId.coerce(draft.artist))
            if event.has_artist(artist.id):
                raise DuplicateArtistError(str(artist.id))
            self._budget.validate(event, [artist.id])

        slot = ArtistSlot(
            role=role,
            artist=Unresolved(artist.id) if artist else None,
            status=status,
        )
        event = self._events.save(event.with_slots(slot))
        logger.info("Slot %s (%s) added to event %s", slot.id, role.value, event.id)

        if artist is None:
            return event

        try:
            self._request_booking(event, slot, artist, actor)
        except Exception:
            self._compensate(self._discard_slot, event.id, slot.id)
            raise
        return event

    def add_slots(self, event_id: str | EventId, drafts: list[SlotDraft], actor: Actor) -> Event:
        """Append several slots in one write.

        Unlike add_slot, no booking requests are created for batch-added
        artists. Callers that need bookings must create them separately.
        """
        event = self._editable_event(event_id, actor)
        parsed = [
            (
                SlotRole.parse(draft.role),
                ArtistId.coerce(draft.artist) if draft.artist else None,
                SlotStatus.parse(draft.status) if draft.status else SlotStatus.UNFILLED,
            )
            for draft in drafts
        ]

        artist_ids = [artist_id for _, artist_id, _ in parsed if artist_id is not None]
        if len(set(artist_ids)) != len(artist_ids):
            raise DuplicateArtistError()
        for artist_id in artist_ids:
            if event.has_artist(artist_id):
                raise DuplicateArtistError(str(artist_id))
        for artist_id in artist_ids:
            self._bookable_artist(artist_id)

        self._budget.validate(event, artist_ids)

        slots = tuple(
            ArtistSlot(role=role, artist=Unresolved(artist_id) if artist_id else None, status=status)
            for role, artist_id, status in parsed
        )
        event = self._events.save(event.with_slots(*slots))
        logger.info("%d slots added to event %s", len(slots), event.id)
        return event

    def update_slot(
        self,
        event_id: str | EventId,
        index: int,
        update: SlotUpdate,
        actor: Actor,
    ) -> Event:
        """Change a slot's artist and/or status.

        A new artist is checked against the budget without the slot being
        replaced and gets a booking request; if that fails the slot's
        previous artist is restored.
        """
        event = self._editable_event(event_id, actor)
        slot = event.slot_at(index)

        artist = None
        if update.artist:
            artist = self._bookable_artist(ArtistId.coerce(update.artist))
            if event.has_artist(artist.id, excluding=slot.id):
                raise DuplicateArtistError(str(artist.id))
            self._budget.validate(event, [artist.id], excluded_slots=[slot.id])

        previous = slot.artist
        changed = slot
        if artist is not None:
            changed = replace(changed, artist=Unresolved(artist.id))
        if update.status:
            changed = replace(changed, status=SlotStatus.parse(update.status))
        event = self._events.save(event.with_slot_replaced(slot.id, changed))

        if artist is None or (previous is not None and previous.artist_id == artist.id):
            return event

        try:
            self._request_booking(event, changed, artist, actor)
        except Exception:
            self._compensate(self._restore_artist, event.id, slot.id, previous)
            raise
        return event

    def remove_slot(self, event_id: str | EventId, index: int, actor: Actor) -> Event:
        """Remove a slot. Later slots shift down by one position."""
        event = self._editable_event(event_id, actor)
        slot = event.slot_at(index)
        event = self._events.save(event.without_slot(slot.id))
        logger.info("Slot %s removed from event %s", slot.id, event.id)
        return event

    def update_slot_status_only(
        self,
        event_id: str | EventId,
        slot: int | SlotId,
        status: SlotStatus,
    ) -> Event:
        """Set a slot's status without authorization or budget checks.

        Reserved for the slot synchronizer; never exposed to users.
        """
        event = self._load(event_id)
        if isinstance(slot, SlotId):
            if event.index_of(slot) is None:
                raise SlotNotFoundError(str(slot))
            target = slot
        else:
            target = event.slot_at(slot).id

        current = event.artist_slots[event.index_of(target)]
        return self._events.save(event.with_slot_replaced(target, replace(current, status=status)))

    # Helpers

    def _load(self, event_id: str | EventId) -> Event:
        key = EventId.coerce(event_id)
        event = self._events.get(key)
        if event is None:
            raise EventNotFoundError(str(key))
        return event

    def _editable_event(self, event_id: str | EventId, actor: Actor) -> Event:
        event = self._load(event_id)
        if not actor.is_admin and not event.is_owned_by(actor):
            raise ForbiddenError("You can only update your own events")
        return event

    def _bookable_artist(self, artist_id: ArtistId) -> Artist:
        artist = self._artists.get(artist_id)
        if artist is None:
            raise ArtistNotFoundError(str(artist_id))
        if not artist.is_active:
            raise ArtistNotActiveError(str(artist_id))
        return artist

    def _request_booking(self, event: Event, slot: ArtistSlot, artist: Artist, actor: Actor) -> None:
        self._bookings.create(
            BookingDraft(
                artist_id=artist.id,
                event_id=event.id,
                status=BookingStatus.REQUESTED.value,
                notes=f"Booking request for {slot.role.value} role in event: {event.title}",
            ),
            actor,
        )

    def _compensate(self, undo, event_id: EventId, *args) -> None:
        """Run a compensating write; its own failure is logged so the original error still propagates."""
        try:
            undo(event_id, *args)
        except Exception:
            logger.exception("Compensation %s failed on event %s", undo.__name__, event_id)

    def _discard_slot(self, event_id: EventId, slot_id: SlotId) -> None:
        event = self._events.get(event_id)
        if event is None or event.index_of(slot_id) is None:
            return
        self._events.save(event.without_slot(slot_id))
        logger.warning("Booking request failed; slot %s removed from event %s", slot_id, event_id)

    def _restore_artist(self, event_id: EventId, slot_id: SlotId, previous: ArtistRef | None) -> None:
        event = self._events.get(event_id)
        if event is None:
            return
        index = event.index_of(slot_id)
        if index is None:
            return
        slot = event.artist_slots[index]
        self._events.save(event.with_slot_replaced(slot_id, replace(slot, artist=previous)))
        logger.warning("Booking request failed; slot %s artist reverted on event %s", slot_id, event_id)
