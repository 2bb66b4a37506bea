"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Each aggregate is
persisted as a single document: ``save`` replaces the whole document
atomically, nothing spans two aggregates.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from gigs.domain import Artist, ArtistId, Booking, BookingId, BookingStatus, Event, EventId, UserId

T = TypeVar("T")
K = TypeVar("K")


class DocumentStore(ABC, Generic[K, T]):
    """Interface for single-document persistence operations."""

    @abstractmethod
    def get(self, key: K) -> T | None:
        """Return a document by ID, or None if not found."""
        ...

    @abstractmethod
    def save(self, document: T) -> T:
        """Insert or replace a document and return what was stored."""
        ...

    @abstractmethod
    def delete(self, key: K) -> bool:
        """Delete a document. Returns False when nothing was deleted."""
        ...

    @abstractmethod
    def list_all(self) -> list[T]:
        """Return all documents ordered by created_at descending."""
        ...

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        return [document for document in self.list_all() if predicate(document)]


class EventStore(DocumentStore[EventId, Event]):
    """Interface for event persistence operations."""

    def find_by_organizer(self, organizer_id: UserId) -> list[Event]:
        return self.find(lambda event: event.organizer_id == organizer_id)


class BookingStore(DocumentStore[BookingId, Booking]):
    """Interface for booking persistence operations."""

    def find_by_artist(
        self,
        artist_id: ArtistId,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        wanted = frozenset(statuses) if statuses is not None else None
        return self.find(
            lambda booking: booking.artist_id == artist_id
            and (wanted is None or booking.status in wanted)
        )

    def find_by_organizer(self, organizer_id: UserId) -> list[Booking]:
        return self.find(lambda booking: booking.organizer_id == organizer_id)


class ArtistStore(DocumentStore[ArtistId, Artist]):
    """Interface for the artist registry."""

    def get_by_user_id(self, user_id: UserId) -> Artist | None:
        """Return the artist profile owned by a user, or None."""
        matches = self.find(lambda artist: artist.user_id == user_id)
        return matches[0] if matches else None
