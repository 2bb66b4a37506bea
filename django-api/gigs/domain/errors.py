"""Domain error codes for the gigs module."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    ARTIST_NOT_FOUND = "ARTIST_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_STATUS = "INVALID_STATUS"
    ARTIST_NOT_ACTIVE = "ARTIST_NOT_ACTIVE"
    DUPLICATE_ARTIST = "DUPLICATE_ARTIST"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    NAIVE_DATETIME = "NAIVE_DATETIME"
    EVENT_DATE_IN_PAST = "EVENT_DATE_IN_PAST"
    BUDGET_EXCEEDED = "BUDGET_EXCEEDED"
    BUDGET_REDUCTION = "BUDGET_REDUCTION"
    FORBIDDEN = "FORBIDDEN"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    INVALID_TRANSITION = "INVALID_TRANSITION"


class ErrorKind(Enum):
    """Broad error categories the API layer maps onto responses."""

    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INVALID_TRANSITION = "invalid_transition"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    kind = ErrorKind.BAD_REQUEST

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def details(self) -> dict[str, Any]:
        """Structured context for rendering; empty unless a subclass adds some."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code.value, "message": self.message}
        details = self.details()
        if details:
            payload["details"] = details
        return payload


# Not found


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class ArtistNotFoundError(NotFoundError):
    """Raised when an artist profile cannot be resolved."""

    def __init__(self, artist_id: str) -> None:
        super().__init__(
            code=ErrorCode.ARTIST_NOT_FOUND,
            message=f"Artist with ID {artist_id} not found",
        )
        self.artist_id = artist_id


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event with ID {event_id} not found",
        )
        self.event_id = event_id


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message=f"Booking with ID {booking_id} not found",
        )
        self.booking_id = booking_id


class SlotNotFoundError(NotFoundError):
    """Raised when an artist slot index (or id) does not exist on an event."""

    def __init__(self, slot: int | str) -> None:
        label = f"index {slot}" if isinstance(slot, int) else f"ID {slot}"
        super().__init__(
            code=ErrorCode.SLOT_NOT_FOUND,
            message=f"Artist slot at {label} not found",
        )
        self.slot = slot


# Bad request


class BadRequestError(DomainError):
    kind = ErrorKind.BAD_REQUEST


class InvalidIdError(BadRequestError):
    """Raised when an identifier is malformed."""

    def __init__(self, id_type: str, value: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {id_type} format: {value}",
        )
        self.id_type = id_type


class InvalidStatusError(BadRequestError):
    """Raised when a status value is not part of the relevant enum."""

    def __init__(self, status: object, choices: list[str]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS,
            message=f"Invalid status {status!r}. Expected one of: {', '.join(choices)}",
        )
        self.choices = choices

    def details(self) -> dict[str, Any]:
        return {"choices": self.choices}


class ArtistNotActiveError(BadRequestError):
    def __init__(self, artist_id: str) -> None:
        super().__init__(
            code=ErrorCode.ARTIST_NOT_ACTIVE,
            message=f"Artist with ID {artist_id} is not active",
        )
        self.artist_id = artist_id


class DuplicateArtistError(BadRequestError):
    """Raised when an artist would occupy two slots of the same event."""

    def __init__(self, artist_id: str | None = None) -> None:
        message = (
            f"Artist with ID {artist_id} is already assigned to this event"
            if artist_id
            else "Duplicate artists found in the provided slots"
        )
        super().__init__(code=ErrorCode.DUPLICATE_ARTIST, message=message)
        self.artist_id = artist_id


class InvalidTimeRangeError(BadRequestError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIME_RANGE,
            message="Start time must be before end time",
        )


class NaiveDateTimeError(BadRequestError):
    """Raised when a datetime carries no timezone and cannot be compared with the clock."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.NAIVE_DATETIME,
            message=f"{field} must include a timezone offset",
        )
        self.field = field


class EventDateInPastError(BadRequestError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_DATE_IN_PAST,
            message="Event date must be in the future",
        )


class BudgetExceededError(BadRequestError):
    """Raised when artist allocations would exceed an event's budget."""

    def __init__(self, allocated, budget, breakdown) -> None:
        readable = ", ".join(f"{line.name}: ${line.cost}" for line in breakdown)
        super().__init__(
            code=ErrorCode.BUDGET_EXCEEDED,
            message=(
                "Artist allocation would exceed event budget. "
                f"Total artist costs: ${allocated}, Event budget: ${budget}. "
                f"Breakdown: {readable}"
            ),
        )
        self.allocated = allocated
        self.budget = budget
        self.breakdown = tuple(breakdown)

    def details(self) -> dict[str, Any]:
        return {
            "allocated": str(self.allocated),
            "budget": str(self.budget),
            "breakdown": [
                {"artist": str(line.artist_id), "name": line.name, "cost": str(line.cost)}
                for line in self.breakdown
            ],
        }


class BudgetReductionError(BadRequestError):
    """Raised when a budget cut would no longer cover the assigned artists."""

    def __init__(self, cause: BudgetExceededError) -> None:
        super().__init__(
            code=ErrorCode.BUDGET_REDUCTION,
            message=f"Cannot reduce budget: {cause.message}",
        )
        self.cause = cause

    def details(self) -> dict[str, Any]:
        return self.cause.details()


# Authorization, conflicts, transitions


class ForbiddenError(DomainError):
    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class BookingConflictError(DomainError):
    """Raised when an artist already has a live booking overlapping the interval."""

    kind = ErrorKind.CONFLICT

    def __init__(self, conflicting_ids: list[str]) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_CONFLICT,
            message=(
                "Artist already has booking(s) during this time period. "
                f"Conflicting booking IDs: {', '.join(conflicting_ids)}"
            ),
        )
        self.conflicting_ids = tuple(conflicting_ids)

    def details(self) -> dict[str, Any]:
        return {"conflicting_ids": list(self.conflicting_ids)}


class InvalidTransitionError(DomainError):
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current: str, target: str, allowed: list[str]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=(
                f"Cannot transition from {current} to {target}. "
                f"Allowed transitions: {', '.join(allowed) or 'none'}"
            ),
        )
        self.current = current
        self.target = target
        self.allowed = tuple(allowed)

    def details(self) -> dict[str, Any]:
        return {"from": self.current, "to": self.target, "allowed": list(self.allowed)}
