"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from rest_framework.test import APIClient

from gigs.domain import (
    Actor,
    Artist,
    ArtistId,
    ArtistStatus,
    Booking,
    BookingId,
    BookingStatus,
    Event,
    EventId,
    EventStatus,
    Money,
    Pricing,
    Role,
    StatusChange,
    UserId,
)
from gigs.services import build_engine
from gigs.stores.memory_store import InMemoryArtistStore, InMemoryBookingStore, InMemoryEventStore

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
EVENT_DAY = NOW + timedelta(days=30)


def at(hour: int) -> datetime:
    """A time on the event day."""
    return EVENT_DAY.replace(hour=hour, minute=0)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def stores() -> SimpleNamespace:
    return SimpleNamespace(
        events=InMemoryEventStore(),
        bookings=InMemoryBookingStore(),
        artists=InMemoryArtistStore(),
    )


@pytest.fixture
def engine(stores):
    return build_engine(stores.events, stores.bookings, stores.artists, clock=lambda: NOW)


@pytest.fixture
def organizer() -> Actor:
    return Actor(id=UserId("organizer-1"), role=Role.ORGANIZER)


@pytest.fixture
def other_organizer() -> Actor:
    return Actor(id=UserId("organizer-2"), role=Role.ORGANIZER)


@pytest.fixture
def admin() -> Actor:
    return Actor(id=UserId("admin-1"), role=Role.ADMIN)


@pytest.fixture
def as_artist():
    def _actor(artist: Artist) -> Actor:
        return Actor(id=artist.user_id, role=Role.ARTIST)

    return _actor


@pytest.fixture
def make_artist(stores):
    def _make(
        name: str = "Artist",
        hourly_rate: str = "100",
        minimum_hours: str = "4",
        travel_fees: str | None = None,
        status: ArtistStatus = ArtistStatus.ACTIVE,
    ) -> Artist:
        artist = Artist(
            id=ArtistId.new(),
            user_id=UserId(f"user-{name.lower()}"),
            name=name,
            pricing=Pricing(
                hourly_rate=Money(Decimal(hourly_rate)),
                minimum_hours=Decimal(minimum_hours),
                travel_fees=Money(Decimal(travel_fees)) if travel_fees is not None else None,
            ),
            status=status,
        )
        return stores.artists.save(artist)

    return _make


@pytest.fixture
def make_event(stores, organizer):
    def _make(
        budget: str = "500",
        slots: tuple = (),
        status: EventStatus = EventStatus.DRAFT,
        organizer_id: UserId | None = None,
    ) -> Event:
        event = Event(
            id=EventId.new(),
            organizer_id=organizer_id or organizer.id,
            title="Summer Fest",
            venue="Main Hall",
            date=EVENT_DAY,
            budget=Money(Decimal(budget)),
            artist_slots=tuple(slots),
            status=status,
            created_at=NOW,
            updated_at=NOW,
        )
        return stores.events.save(event)

    return _make


@pytest.fixture
def make_booking(stores):
    def _make(
        artist: Artist,
        event: Event,
        status: BookingStatus = BookingStatus.REQUESTED,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> Booking:
        booking = Booking(
            id=BookingId.new(),
            artist_id=artist.id,
            event_id=event.id,
            organizer_id=event.organizer_id,
            status=status,
            status_history=(StatusChange(status, NOW, event.organizer_id),),
            start_time=start_time,
            end_time=end_time,
            created_at=NOW,
            updated_at=NOW,
        )
        return stores.bookings.save(booking)

    return _make
