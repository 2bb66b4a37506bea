"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID, uuid4

from gigs.domain.errors import InvalidIdError


class _UUIDIdentifier:
    """Shared parsing for UUID-backed identifiers."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        try:
            return cls(value=UUID(str(value)))
        except (TypeError, ValueError, AttributeError):
            raise InvalidIdError(cls.__name__, value) from None

    @classmethod
    def coerce(cls, value: "str | Self") -> Self:
        """Accept either an already-typed id or its string form."""
        if isinstance(value, cls):
            return value
        return cls.from_string(value)

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId(_UUIDIdentifier):
    """Unique identifier for an Event."""

    value: UUID


@dataclass(frozen=True)
class BookingId(_UUIDIdentifier):
    """Unique identifier for a Booking."""

    value: UUID


@dataclass(frozen=True)
class ArtistId(_UUIDIdentifier):
    """Unique identifier for an Artist profile."""

    value: UUID


@dataclass(frozen=True)
class SlotId(_UUIDIdentifier):
    """Stable identifier for an artist slot, assigned when it is appended."""

    value: UUID


@dataclass(frozen=True)
class UserId:
    """Opaque identifier owned by the user directory."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def times(self, factor: Decimal | int) -> "Money":
        return Money(self.amount * Decimal(str(factor)))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
