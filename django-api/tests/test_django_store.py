"""Tests for the Django ORM stores.

Run with: pytest tests/test_django_store.py -v
"""

from datetime import date
from decimal import Decimal

import pytest

from conftest import EVENT_DAY, NOW, at
from gigs.domain import (
    Artist,
    ArtistId,
    ArtistSlot,
    ArtistStatus,
    Availability,
    Booking,
    BookingId,
    BookingStatus,
    Event,
    EventId,
    Money,
    Payment,
    Pricing,
    SlotRole,
    SlotStatus,
    StatusChange,
    Unresolved,
    UserId,
)
from gigs.stores.django_store import DjangoArtistStore, DjangoBookingStore, DjangoEventStore

pytestmark = pytest.mark.django_db


def make_artist(name="P", user_id="7") -> Artist:
    return Artist(
        id=ArtistId.new(),
        user_id=UserId(user_id),
        name=name,
        pricing=Pricing(
            hourly_rate=Money(Decimal("100")),
            minimum_hours=Decimal("4"),
            travel_fees=Money(Decimal("50")),
        ),
        status=ArtistStatus.ACTIVE,
        genres=("jazz",),
        availability=(Availability(date(2026, 7, 1), True),),
    )


def make_event(slots=()) -> Event:
    return Event(
        id=EventId.new(),
        organizer_id=UserId("3"),
        title="Summer Fest",
        venue="Main Hall",
        date=EVENT_DAY,
        budget=Money(Decimal("500")),
        artist_slots=tuple(slots),
        created_at=NOW,
        updated_at=NOW,
    )


class TestDjangoArtistStore:
    def test_save_and_get(self):
        store = DjangoArtistStore()
        artist = store.save(make_artist())

        loaded = store.get(artist.id)

        assert loaded.name == "P"
        assert loaded.cost() == Money(Decimal("450"))
        assert loaded.genres == ("jazz",)
        assert loaded.is_available_on(date(2026, 7, 1))
        assert store.get_by_user_id(UserId("7")).id == artist.id

    def test_get_missing_returns_none(self):
        assert DjangoArtistStore().get(ArtistId.new()) is None


class TestDjangoEventStore:
    def test_slots_round_trip_with_stable_ids(self):
        store = DjangoEventStore()
        artist_id = ArtistId.new()
        filled = ArtistSlot(role=SlotRole.HEADLINER, artist=Unresolved(artist_id), status=SlotStatus.PENDING)
        empty = ArtistSlot(role=SlotRole.OPENER)
        event = store.save(make_event(slots=(filled, empty)))

        loaded = store.get(event.id)

        assert [slot.id for slot in loaded.artist_slots] == [filled.id, empty.id]
        assert loaded.artist_slots[0].artist_id == artist_id
        assert loaded.artist_slots[0].status is SlotStatus.PENDING
        assert loaded.artist_slots[1].artist is None
        assert loaded.budget == Money(Decimal("500"))

    def test_save_replaces_whole_document(self):
        store = DjangoEventStore()
        event = store.save(make_event(slots=(ArtistSlot(role=SlotRole.OPENER),)))

        store.save(event.without_slot(event.artist_slots[0].id))

        assert store.get(event.id).artist_slots == ()

    def test_find_by_organizer_and_delete(self):
        store = DjangoEventStore()
        event = store.save(make_event())

        assert [found.id for found in store.find_by_organizer(UserId("3"))] == [event.id]
        assert store.delete(event.id)
        assert not store.delete(event.id)


class TestDjangoBookingStore:
    def make_booking(self, artist_id, status=BookingStatus.REQUESTED) -> Booking:
        return Booking(
            id=BookingId.new(),
            artist_id=artist_id,
            event_id=EventId.new(),
            organizer_id=UserId("3"),
            status=status,
            status_history=(StatusChange(status, NOW, UserId("3")),),
            start_time=at(10),
            end_time=at(12),
            payment=Payment(amount=Money(Decimal("300")), is_paid=True, paid_date=NOW, transaction_id="tx"),
            created_at=NOW,
            updated_at=NOW,
        )

    def test_round_trip(self):
        store = DjangoBookingStore()
        booking = store.save(self.make_booking(ArtistId.new()))

        loaded = store.get(booking.id)

        assert loaded.status_history == booking.status_history
        assert loaded.payment == booking.payment
        assert (loaded.start_time, loaded.end_time) == (at(10), at(12))

    def test_find_by_artist_filters_statuses(self):
        store = DjangoBookingStore()
        artist_id = ArtistId.new()
        live = store.save(self.make_booking(artist_id, BookingStatus.ACCEPTED))
        store.save(self.make_booking(artist_id, BookingStatus.CANCELLED))
        store.save(self.make_booking(ArtistId.new(), BookingStatus.ACCEPTED))

        found = store.find_by_artist(artist_id, [BookingStatus.REQUESTED, BookingStatus.ACCEPTED])

        assert [booking.id for booking in found] == [live.id]
        assert len(store.find_by_artist(artist_id)) == 2
