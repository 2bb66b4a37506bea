"""In-process stores keyed by domain id.

Used by the unit tests and anywhere the engine runs without a database.
"""

import threading
from typing import Generic, TypeVar

from gigs.stores.interfaces import ArtistStore, BookingStore, EventStore

T = TypeVar("T")
K = TypeVar("K")


class _InMemoryDocuments(Generic[K, T]):
    def __init__(self, documents=()) -> None:
        self._lock = threading.Lock()
        self._documents: dict[K, T] = {}
        for document in documents:
            self._documents[document.id] = document

    def get(self, key: K) -> T | None:
        with self._lock:
            return self._documents.get(key)

    def save(self, document: T) -> T:
        with self._lock:
            self._documents[document.id] = document
        return document

    def delete(self, key: K) -> bool:
        with self._lock:
            return self._documents.pop(key, None) is not None

    def list_all(self) -> list[T]:
        with self._lock:
            documents = list(self._documents.values())
        return sorted(documents, key=lambda document: document.created_at, reverse=True)


class InMemoryEventStore(_InMemoryDocuments, EventStore):
    pass


class InMemoryBookingStore(_InMemoryDocuments, BookingStore):
    pass


class InMemoryArtistStore(_InMemoryDocuments, ArtistStore):
    """Artists have no created_at; keep insertion order."""

    def list_all(self) -> list:
        with self._lock:
            return list(self._documents.values())
