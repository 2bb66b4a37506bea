"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in gigs/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Self

from gigs.domain.errors import InvalidStatusError, NaiveDateTimeError, SlotNotFoundError
from gigs.domain.value_objects import ArtistId, BookingId, EventId, Money, SlotId, UserId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_aware(value: datetime | None, field: str) -> datetime | None:
    if value is not None and value.utcoffset() is None:
        raise NaiveDateTimeError(field)
    return value


class _Choice(str, Enum):
    @classmethod
    def parse(cls, value: "str | Self") -> Self:
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatusError(value, [member.value for member in cls]) from None


class Role(_Choice):
    ARTIST = "artist"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class ArtistStatus(_Choice):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING_REVIEW = "pending_review"


class EventStatus(_Choice):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class SlotRole(_Choice):
    HEADLINER = "headliner"
    SUPPORT = "support"
    OPENER = "opener"


class SlotStatus(_Choice):
    UNFILLED = "unfilled"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingStatus(_Choice):
    REQUESTED = "requested"
    IN_REVIEW = "in_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    PAID = "paid"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Actor:
    """The authenticated user as seen by the core."""

    id: UserId
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


# Artists


@dataclass(frozen=True)
class Pricing:
    hourly_rate: Money
    minimum_hours: Decimal
    travel_fees: Money | None = None

    def cost(self) -> Money:
        """hourly_rate * minimum_hours + travel_fees (missing fees count as zero)."""
        base = self.hourly_rate.times(self.minimum_hours)
        return base + (self.travel_fees or Money.zero())


@dataclass(frozen=True)
class Availability:
    date: date
    is_available: bool = False


@dataclass(frozen=True)
class Artist:
    """Domain representation of an Artist profile."""

    id: ArtistId
    user_id: UserId
    name: str
    pricing: Pricing
    status: ArtistStatus = ArtistStatus.PENDING_REVIEW
    genres: tuple[str, ...] = ()
    description: str = ""
    availability: tuple[Availability, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.status is ArtistStatus.ACTIVE

    def cost(self) -> Money:
        return self.pricing.cost()

    def with_availability(self, updates: list[Availability]) -> Self:
        """Merge availability by calendar day: same date replaces, new dates append."""
        merged = list(self.availability)
        for update in updates:
            for index, existing in enumerate(merged):
                if existing.date == update.date:
                    merged[index] = update
                    break
            else:
                merged.append(update)
        return replace(self, availability=tuple(merged))

    def is_available_on(self, day: date) -> bool:
        return any(entry.date == day and entry.is_available for entry in self.availability)


# Events and slots


@dataclass(frozen=True)
class Unresolved:
    """An artist reference known only by id."""

    artist_id: ArtistId


@dataclass(frozen=True)
class Resolved:
    """An artist reference with its registry record loaded."""

    artist: Artist

    @property
    def artist_id(self) -> ArtistId:
        return self.artist.id


ArtistRef = Unresolved | Resolved


@dataclass(frozen=True)
class ArtistSlot:
    """A role-typed placeholder within an event."""

    role: SlotRole
    artist: ArtistRef | None = None
    status: SlotStatus = SlotStatus.UNFILLED
    id: SlotId = field(default_factory=SlotId.new)

    @property
    def artist_id(self) -> ArtistId | None:
        return self.artist.artist_id if self.artist is not None else None


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    organizer_id: UserId
    title: str
    venue: str
    date: datetime
    budget: Money
    description: str = ""
    requirements: str = ""
    artist_slots: tuple[ArtistSlot, ...] = ()
    status: EventStatus = EventStatus.DRAFT
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def is_owned_by(self, actor: Actor) -> bool:
        return self.organizer_id == actor.id

    def artist_ids(self) -> list[ArtistId]:
        return [slot.artist_id for slot in self.artist_slots if slot.artist_id is not None]

    def has_artist(self, artist_id: ArtistId, excluding: SlotId | None = None) -> bool:
        return any(
            slot.artist_id == artist_id
            for slot in self.artist_slots
            if slot.id != excluding
        )

    def slot_at(self, index: int) -> ArtistSlot:
        if index < 0 or index >= len(self.artist_slots):
            raise SlotNotFoundError(index)
        return self.artist_slots[index]

    def index_of(self, slot_id: SlotId) -> int | None:
        for index, slot in enumerate(self.artist_slots):
            if slot.id == slot_id:
                return index
        return None

    def index_of_artist(self, artist_id: ArtistId) -> int | None:
        for index, slot in enumerate(self.artist_slots):
            if slot.artist_id == artist_id:
                return index
        return None

    def with_slots(self, *slots: ArtistSlot) -> Self:
        return replace(self, artist_slots=self.artist_slots + slots, updated_at=utcnow())

    def with_slot_replaced(self, slot_id: SlotId, slot: ArtistSlot) -> Self:
        slots = tuple(slot if s.id == slot_id else s for s in self.artist_slots)
        return replace(self, artist_slots=slots, updated_at=utcnow())

    def without_slot(self, slot_id: SlotId) -> Self:
        slots = tuple(s for s in self.artist_slots if s.id != slot_id)
        return replace(self, artist_slots=slots, updated_at=utcnow())


# Bookings


@dataclass(frozen=True)
class StatusChange:
    status: BookingStatus
    timestamp: datetime
    changed_by: UserId


@dataclass(frozen=True)
class Payment:
    amount: Money
    is_paid: bool = False
    paid_date: datetime | None = None
    transaction_id: str | None = None


@dataclass(frozen=True)
class Booking:
    """Lifecycle record of one artist's engagement with one event."""

    id: BookingId
    artist_id: ArtistId
    event_id: EventId
    organizer_id: UserId
    status: BookingStatus
    status_history: tuple[StatusChange, ...]
    start_time: datetime | None = None
    end_time: datetime | None = None
    payment: Payment | None = None
    notes: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def has_interval(self) -> bool:
        return self.start_time is not None and self.end_time is not None

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open overlap: touching boundaries do not overlap."""
        if not self.has_interval:
            return False
        return start < self.end_time and end > self.start_time

    def transitioned(self, status: BookingStatus, actor: Actor, at: datetime) -> Self:
        """Return a copy in ``status`` with one more history entry."""
        history = self.status_history + (StatusChange(status, at, actor.id),)
        return replace(self, status=status, status_history=history, updated_at=at)
