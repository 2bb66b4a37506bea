"""Event service - event lifecycle outside of slot assignment."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from gigs.domain import (
    Actor,
    ArtistId,
    ArtistSlot,
    Event,
    EventId,
    EventStatus,
    Money,
    Resolved,
    Role,
    SlotRole,
    SlotStatus,
    Unresolved,
    UserId,
)
from gigs.domain.errors import (
    ArtistNotActiveError,
    ArtistNotFoundError,
    BudgetExceededError,
    BudgetReductionError,
    DuplicateArtistError,
    EventDateInPastError,
    EventNotFoundError,
    ForbiddenError,
)
from gigs.domain.models import require_aware, utcnow
from gigs.services.budget import BudgetValidator
from gigs.services.slot_service import SlotDraft
from gigs.stores.interfaces import ArtistStore, EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventDraft:
    title: str
    venue: str
    date: datetime
    budget: Decimal
    description: str = ""
    requirements: str = ""
    artist_slots: list[SlotDraft] = field(default_factory=list)
    status: str | None = None


@dataclass(frozen=True)
class EventChanges:
    title: str | None = None
    venue: str | None = None
    description: str | None = None
    requirements: str | None = None
    date: datetime | None = None
    budget: Decimal | None = None


class EventService:
    """Service for event operations."""

    def __init__(
        self,
        events: EventStore,
        artists: ArtistStore,
        budget: BudgetValidator,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._events = events
        self._artists = artists
        self._budget = budget
        self._clock = clock

    def create(self, draft: EventDraft, actor: Actor) -> Event:
        """Create an event owned by the actor.

        Pre-assigned artists are admitted one at a time through the budget
        check. No bookings are created for them.

        Raises:
            EventDateInPastError: If the date is not in the future.
            BudgetExceededError: If the pre-assigned artists exceed the budget.
        """
        if actor.role not in (Role.ORGANIZER, Role.ADMIN):
            raise ForbiddenError("Only organizers can create events")
        now = self._clock()
        if require_aware(draft.date, "date") <= now:
            raise EventDateInPastError()

        event = Event(
            id=EventId.new(),
            organizer_id=actor.id,
            title=draft.title,
            venue=draft.venue,
            date=draft.date,
            budget=Money(draft.budget),
            description=draft.description,
            requirements=draft.requirements,
            status=EventStatus.parse(draft.status) if draft.status else EventStatus.DRAFT,
            created_at=now,
            updated_at=now,
        )

        for slot_draft in draft.artist_slots:
            artist_ref = None
            if slot_draft.artist:
                artist_id = ArtistId.coerce(slot_draft.artist)
                artist = self._artists.get(artist_id)
                if artist is None:
                    raise ArtistNotFoundError(str(artist_id))
                if not artist.is_active:
                    raise ArtistNotActiveError(str(artist_id))
                if event.has_artist(artist_id):
                    raise DuplicateArtistError(str(artist_id))
                self._budget.validate(event, [artist_id])
                artist_ref = Unresolved(artist_id)
            event = event.with_slots(
                ArtistSlot(
                    role=SlotRole.parse(slot_draft.role),
                    artist=artist_ref,
                    status=SlotStatus.parse(slot_draft.status) if slot_draft.status else SlotStatus.UNFILLED,
                )
            )

        event = self._events.save(event)
        logger.info("Event %s created by %s", event.id, actor.id)
        return event

    def find_one(self, event_id: str | EventId, resolve: bool = False) -> Event:
        """Return an event by ID, optionally with artist references resolved.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        key = EventId.coerce(event_id)
        event = self._events.get(key)
        if event is None:
            raise EventNotFoundError(str(key))
        return self._resolve(event) if resolve else event

    def find_all(self) -> list[Event]:
        return self._events.list_all()

    def find_by_organizer(self, organizer_id: UserId) -> list[Event]:
        return self._events.find_by_organizer(organizer_id)

    def update(self, event_id: str | EventId, changes: EventChanges, actor: Actor) -> Event:
        """Update event details.

        Raises:
            EventDateInPastError: If a new date is not in the future.
            BudgetReductionError: If a lower budget no longer covers the assigned artists.
        """
        event = self._owned_event(event_id, actor)

        if changes.date is not None and require_aware(changes.date, "date") <= self._clock():
            raise EventDateInPastError()

        if changes.budget is not None and Money(changes.budget) < event.budget:
            try:
                self._budget.validate(replace(event, budget=Money(changes.budget)))
            except BudgetExceededError as exc:
                raise BudgetReductionError(exc) from exc

        updated = replace(
            event,
            title=changes.title if changes.title is not None else event.title,
            venue=changes.venue if changes.venue is not None else event.venue,
            description=changes.description if changes.description is not None else event.description,
            requirements=changes.requirements if changes.requirements is not None else event.requirements,
            date=changes.date or event.date,
            budget=Money(changes.budget) if changes.budget is not None else event.budget,
            updated_at=self._clock(),
        )
        return self._events.save(updated)

    def update_status(self, event_id: str | EventId, status: str | EventStatus, actor: Actor) -> Event:
        event = self._owned_event(event_id, actor)
        updated = replace(event, status=EventStatus.parse(status), updated_at=self._clock())
        logger.info("Event %s status %s -> %s", event.id, event.status.value, updated.status.value)
        return self._events.save(updated)

    def remove(self, event_id: str | EventId, actor: Actor) -> Event:
        """Delete an event; a non-admin removing a published event cancels it instead."""
        event = self._owned_event(event_id, actor)

        if not actor.is_admin and event.status is EventStatus.PUBLISHED:
            return self.update_status(event.id, EventStatus.CANCELLED, actor)

        if not self._events.delete(event.id):
            raise EventNotFoundError(str(event.id))
        logger.info("Event %s deleted by %s", event.id, actor.id)
        return event

    def _owned_event(self, event_id: str | EventId, actor: Actor) -> Event:
        event = self.find_one(event_id)
        if not actor.is_admin and not event.is_owned_by(actor):
            raise ForbiddenError("You can only update your own events")
        return event

    def _resolve(self, event: Event) -> Event:
        slots = []
        for slot in event.artist_slots:
            if isinstance(slot.artist, Unresolved):
                artist = self._artists.get(slot.artist.artist_id)
                if artist is not None:
                    slot = replace(slot, artist=Resolved(artist))
            slots.append(slot)
        return replace(event, artist_slots=tuple(slots))
