"""Booking lifecycle rules: the transition table and slot-status mapping."""

from gigs.domain.errors import InvalidTransitionError
from gigs.domain.models import Actor, BookingStatus, SlotStatus

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.REQUESTED: frozenset(
        {BookingStatus.IN_REVIEW, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.IN_REVIEW: frozenset(
        {BookingStatus.ACCEPTED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.ACCEPTED: frozenset({BookingStatus.PAID, BookingStatus.CANCELLED}),
    BookingStatus.PAID: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Admins override the table entirely, except they cannot reopen these.
ADMIN_LOCKED = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})

# Bookings in these states hold the artist's time.
ACTIVE_STATUSES = frozenset(
    {
        BookingStatus.REQUESTED,
        BookingStatus.IN_REVIEW,
        BookingStatus.ACCEPTED,
        BookingStatus.PAID,
    }
)

# Non-admin parties may hard-delete while the booking is still in these states.
DELETABLE_STATUSES = frozenset({BookingStatus.REQUESTED, BookingStatus.IN_REVIEW})

ARTIST_ONLY = frozenset({BookingStatus.IN_REVIEW, BookingStatus.ACCEPTED, BookingStatus.REJECTED})
ORGANIZER_ONLY = frozenset({BookingStatus.PAID, BookingStatus.COMPLETED})

_SLOT_STATUS = {
    BookingStatus.REQUESTED: SlotStatus.PENDING,
    BookingStatus.IN_REVIEW: SlotStatus.PENDING,
    BookingStatus.ACCEPTED: SlotStatus.PENDING,
    BookingStatus.PAID: SlotStatus.CONFIRMED,
    BookingStatus.COMPLETED: SlotStatus.CONFIRMED,
    BookingStatus.REJECTED: SlotStatus.CANCELLED,
    BookingStatus.CANCELLED: SlotStatus.CANCELLED,
}


def allowed_targets(current: BookingStatus) -> list[str]:
    return sorted(status.value for status in ALLOWED_TRANSITIONS.get(current, frozenset()))


def assert_transition(current: BookingStatus, target: BookingStatus, actor: Actor) -> None:
    """Raise InvalidTransitionError unless ``actor`` may move current -> target.

    Admins may jump to any status, including backwards (paid -> requested) or
    skipping steps (requested -> paid), as long as the booking is not already
    completed or cancelled. Rejected is terminal for everyone else but not
    for admins.
    """
    if actor.is_admin:
        if current in ADMIN_LOCKED:
            raise InvalidTransitionError(current.value, target.value, [])
        return

    if target not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(current.value, target.value, allowed_targets(current))


def slot_status_for(status: BookingStatus | str) -> SlotStatus:
    """Map a booking status onto the slot status shown on the event."""
    try:
        return _SLOT_STATUS[BookingStatus(status)]
    except (KeyError, ValueError):
        return SlotStatus.UNFILLED
