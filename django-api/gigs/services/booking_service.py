"""Booking service - the booking lifecycle and its authorization rules.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from gigs.domain import (
    Actor,
    ArtistId,
    Booking,
    BookingId,
    BookingStatus,
    EventId,
    Money,
    Payment,
    Role,
    StatusChange,
    UserId,
)
from gigs.domain.errors import (
    ArtistNotActiveError,
    ArtistNotFoundError,
    BookingConflictError,
    BookingNotFoundError,
    EventNotFoundError,
    ForbiddenError,
    InvalidTimeRangeError,
)
from gigs.domain.models import require_aware, utcnow
from gigs.domain.transitions import (
    ACTIVE_STATUSES,
    ARTIST_ONLY,
    DELETABLE_STATUSES,
    ORGANIZER_ONLY,
    assert_transition,
)
from gigs.metrics import bookings_created_total, slot_sync_failures_total
from gigs.stores.interfaces import ArtistStore, BookingStore, EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingDraft:
    """Input for creating a booking."""

    artist_id: str | ArtistId
    event_id: str | EventId
    start_time: datetime | None = None
    end_time: datetime | None = None
    payment_amount: Decimal | None = None
    transaction_id: str | None = None
    notes: str = ""
    status: str | None = None


@dataclass(frozen=True)
class BookingChanges:
    """Partial update for a booking; None means "leave unchanged"."""

    start_time: datetime | None = None
    end_time: datetime | None = None
    notes: str | None = None
    payment_amount: Decimal | None = None
    status: str | None = None


class BookingService:
    """Service for the booking lifecycle."""

    def __init__(
        self,
        bookings: BookingStore,
        events: EventStore,
        artists: ArtistStore,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._bookings = bookings
        self._events = events
        self._artists = artists
        self._clock = clock
        self._synchronizer = None

    def bind_synchronizer(self, synchronizer) -> None:
        """Attach the slot synchronizer run after every status change."""
        self._synchronizer = synchronizer

    # Queries

    def find_one(self, booking_id: str | BookingId) -> Booking:
        """Return a booking by ID.

        Raises:
            InvalidIdError: If booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        key = BookingId.coerce(booking_id)
        booking = self._bookings.get(key)
        if booking is None:
            raise BookingNotFoundError(str(key))
        return booking

    def find_all(self) -> list[Booking]:
        return self._bookings.list_all()

    def find_by_artist(self, artist_id: str | ArtistId) -> list[Booking]:
        return self._bookings.find_by_artist(ArtistId.coerce(artist_id))

    def find_by_organizer(self, organizer_id: UserId) -> list[Booking]:
        return self._bookings.find_by_organizer(organizer_id)

    def find_for_actor(self, actor: Actor) -> list[Booking]:
        """Bookings the actor takes part in: as organizer, or as the booked artist."""
        if actor.is_admin:
            return self.find_all()
        if actor.role is Role.ARTIST:
            profile = self._artists.get_by_user_id(actor.id)
            return self._bookings.find_by_artist(profile.id) if profile else []
        return self.find_by_organizer(actor.id)

    # Commands

    def create(self, draft: BookingDraft, actor: Actor) -> Booking:
        """Create a booking for an artist at an event.

        Raises:
            ArtistNotFoundError / EventNotFoundError: Unknown references.
            ArtistNotActiveError: The artist is not bookable.
            ForbiddenError: A non-admin actor does not own the event.
            InvalidTimeRangeError: start_time is not before end_time.
            BookingConflictError: The artist already holds an overlapping booking.
        """
        artist_id = ArtistId.coerce(draft.artist_id)
        artist = self._artists.get(artist_id)
        if artist is None:
            raise ArtistNotFoundError(str(artist_id))
        if not artist.is_active:
            raise ArtistNotActiveError(str(artist_id))

        event_id = EventId.coerce(draft.event_id)
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        if not actor.is_admin and not event.is_owned_by(actor):
            raise ForbiddenError("You can only create bookings for your own events")

        self._check_date_conflicts(artist_id, draft.start_time, draft.end_time)

        status = BookingStatus.parse(draft.status) if draft.status else BookingStatus.REQUESTED
        now = self._clock()
        payment = None
        if draft.payment_amount is not None:
            payment = Payment(amount=Money(draft.payment_amount), transaction_id=draft.transaction_id)

        booking = self._bookings.save(
            Booking(
                id=BookingId.new(),
                artist_id=artist_id,
                event_id=event_id,
                organizer_id=event.organizer_id,
                status=status,
                status_history=(StatusChange(status, now, actor.id),),
                start_time=draft.start_time,
                end_time=draft.end_time,
                payment=payment,
                notes=draft.notes,
                created_at=now,
                updated_at=now,
            )
        )
        bookings_created_total.inc()
        logger.info(
            "Booking %s created for artist %s at event %s (%s)",
            booking.id,
            artist_id,
            event_id,
            status.value,
        )
        return booking

    def update_status(
        self,
        booking_id: str | BookingId,
        status: str | BookingStatus,
        actor: Actor,
        notes: str | None = None,
    ) -> Booking:
        """Move a booking to a new status and reflect it on the event slot.

        Raises:
            ForbiddenError: The actor may not set this status on this booking.
            InvalidTransitionError: The transition table does not allow it.
        """
        booking = self.find_one(booking_id)
        target = BookingStatus.parse(status)

        self._check_status_authorization(booking, target, actor)
        assert_transition(booking.status, target, actor)

        updated = self._transition(booking, target, actor)
        if notes:
            updated = replace(updated, notes=_append_note(updated.notes, notes))

        updated = self._bookings.save(updated)
        logger.info(
            "Booking %s moved %s -> %s by %s",
            booking.id,
            booking.status.value,
            target.value,
            actor.id,
        )
        self._sync_slot(updated)
        return updated

    def update(self, booking_id: str | BookingId, changes: BookingChanges, actor: Actor) -> Booking:
        """Edit times, notes, payment and optionally status of a live booking."""
        booking = self.find_one(booking_id)
        self._check_update_authorization(booking, actor)

        updated = booking
        if changes.start_time is not None or changes.end_time is not None:
            start = changes.start_time or booking.start_time
            end = changes.end_time or booking.end_time
            self._check_date_conflicts(booking.artist_id, start, end, exclude=booking.id)
            updated = replace(updated, start_time=start, end_time=end)

        if changes.notes is not None:
            updated = replace(updated, notes=changes.notes)
        if changes.payment_amount is not None:
            payment = updated.payment or Payment(amount=Money(changes.payment_amount))
            updated = replace(updated, payment=replace(payment, amount=Money(changes.payment_amount)))

        status_changed = False
        if changes.status is not None:
            target = BookingStatus.parse(changes.status)
            if target is not booking.status:
                self._check_status_authorization(booking, target, actor)
                assert_transition(booking.status, target, actor)
                updated = self._transition(updated, target, actor)
                status_changed = True

        updated = self._bookings.save(replace(updated, updated_at=self._clock()))
        if status_changed:
            self._sync_slot(updated)
        return updated

    def remove(self, booking_id: str | BookingId, actor: Actor) -> Booking:
        """Delete a booking, or cancel it when a party may no longer delete it.

        Admins always hard-delete. Organizer and artist may hard-delete only
        while the booking is requested or in review; later it is cancelled.
        """
        booking = self.find_one(booking_id)

        if not actor.is_admin:
            is_organizer, is_artist = self._parties(booking, actor)
            if not is_organizer and not is_artist:
                raise ForbiddenError("You can only cancel your own bookings")
            if booking.status not in DELETABLE_STATUSES:
                return self.update_status(booking.id, BookingStatus.CANCELLED, actor)

        if not self._bookings.delete(booking.id):
            raise BookingNotFoundError(str(booking.id))
        logger.info("Booking %s deleted by %s", booking.id, actor.id)
        return booking

    # Helpers

    def _transition(self, booking: Booking, target: BookingStatus, actor: Actor) -> Booking:
        """Append the history entry; moving to paid also settles an attached payment."""
        now = self._clock()
        updated = booking.transitioned(target, actor, now)
        if target is BookingStatus.PAID and updated.payment is not None:
            updated = replace(updated, payment=replace(updated.payment, is_paid=True, paid_date=now))
        return updated

    def _check_date_conflicts(
        self,
        artist_id: ArtistId,
        start: datetime | None,
        end: datetime | None,
        exclude: BookingId | None = None,
    ) -> None:
        require_aware(start, "start_time")
        require_aware(end, "end_time")
        if start is None or end is None:
            return
        if start >= end:
            raise InvalidTimeRangeError()

        conflicts = [
            existing
            for existing in self._bookings.find_by_artist(artist_id, ACTIVE_STATUSES)
            if existing.id != exclude and existing.overlaps(start, end)
        ]
        if conflicts:
            raise BookingConflictError([str(existing.id) for existing in conflicts])

    def _parties(self, booking: Booking, actor: Actor) -> tuple[bool, bool]:
        is_organizer = booking.organizer_id == actor.id
        artist = self._artists.get(booking.artist_id)
        is_artist = artist is not None and artist.user_id == actor.id
        return is_organizer, is_artist

    def _check_update_authorization(self, booking: Booking, actor: Actor) -> None:
        if actor.is_admin:
            return
        is_organizer, is_artist = self._parties(booking, actor)
        if not is_organizer and not is_artist:
            raise ForbiddenError("You can only update your own bookings")
        if booking.status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED):
            raise ForbiddenError("Cannot update completed or cancelled bookings")

    def _check_status_authorization(self, booking: Booking, target: BookingStatus, actor: Actor) -> None:
        if actor.is_admin:
            return

        is_organizer, is_artist = self._parties(booking, actor)
        if not is_organizer and not is_artist:
            raise ForbiddenError("You can only update your own bookings")

        if target in ARTIST_ONLY and not is_artist:
            raise ForbiddenError(f"Only the booked artist can mark bookings as {target.value}")
        if target in ORGANIZER_ONLY and not is_organizer:
            raise ForbiddenError(f"Only the organizer can mark bookings as {target.value}")

    def _sync_slot(self, booking: Booking) -> None:
        """Reflect the booking status on the event slot; never fails the caller."""
        if self._synchronizer is None:
            return
        try:
            self._synchronizer.sync(booking)
        except Exception:
            slot_sync_failures_total.inc()
            logger.exception(
                "Failed to sync event artist slot status for booking %s (event %s)",
                booking.id,
                booking.event_id,
            )


def _append_note(existing: str, note: str) -> str:
    return f"{existing}\n{note}" if existing else note
