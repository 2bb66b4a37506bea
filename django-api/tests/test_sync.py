"""Tests for slot status synchronization driven by booking status changes.

Run with: pytest tests/test_sync.py -v
"""

import logging

import pytest

from gigs.domain import ArtistSlot, BookingStatus, SlotRole, SlotStatus, Unresolved
from gigs.metrics import REGISTRY


@pytest.fixture
def booked(make_artist, make_event, make_booking):
    """An event whose headliner slot holds an artist with a requested booking."""

    def _make(status=BookingStatus.REQUESTED):
        artist = make_artist("P")
        event = make_event(slots=(ArtistSlot(role=SlotRole.HEADLINER, artist=Unresolved(artist.id)),))
        booking = make_booking(artist, event, status)
        return artist, event, booking

    return _make


def slot_status(engine, event):
    return engine.events.find_one(event.id).artist_slots[0].status


class TestSlotSynchronizer:
    def test_lifecycle_drives_slot_status(self, engine, organizer, as_artist, booked):
        artist, event, booking = booked()

        engine.bookings.update_status(booking.id, "in_review", as_artist(artist))
        assert slot_status(engine, event) is SlotStatus.PENDING

        engine.bookings.update_status(booking.id, "accepted", as_artist(artist))
        assert slot_status(engine, event) is SlotStatus.PENDING

        engine.bookings.update_status(booking.id, "paid", organizer)
        assert slot_status(engine, event) is SlotStatus.CONFIRMED

        engine.bookings.update_status(booking.id, "completed", organizer)
        assert slot_status(engine, event) is SlotStatus.CONFIRMED

    def test_rejection_cancels_slot(self, engine, as_artist, booked):
        artist, event, booking = booked()

        engine.bookings.update_status(booking.id, "rejected", as_artist(artist))

        assert slot_status(engine, event) is SlotStatus.CANCELLED

    def test_cancel_through_remove_cancels_slot(self, engine, organizer, booked):
        _, event, booking = booked(BookingStatus.PAID)

        engine.bookings.remove(booking.id, organizer)

        assert slot_status(engine, event) is SlotStatus.CANCELLED

    def test_artist_keeps_slot_after_cancellation(self, engine, organizer, booked):
        artist, event, booking = booked(BookingStatus.ACCEPTED)

        engine.bookings.update_status(booking.id, "cancelled", organizer)

        assert engine.events.find_one(event.id).artist_slots[0].artist_id == artist.id

    def test_only_the_booked_artists_slot_changes(self, engine, organizer, make_artist, make_event, make_booking):
        p = make_artist("P")
        q = make_artist("Q")
        event = make_event(
            budget="1000",
            slots=(
                ArtistSlot(role=SlotRole.HEADLINER, artist=Unresolved(p.id)),
                ArtistSlot(role=SlotRole.SUPPORT, artist=Unresolved(q.id)),
            ),
        )
        booking = make_booking(q, event, BookingStatus.ACCEPTED)

        engine.bookings.update_status(booking.id, "paid", organizer)

        slots = engine.events.find_one(event.id).artist_slots
        assert [slot.status for slot in slots] == [SlotStatus.UNFILLED, SlotStatus.CONFIRMED]

    def test_no_matching_slot_is_a_no_op(self, engine, make_artist, make_event, make_booking):
        booking = make_booking(make_artist("P"), make_event(), BookingStatus.PAID)

        assert engine.synchronizer.sync(booking) is None

    def test_deleted_event_is_a_no_op(self, engine, stores, booked):
        _, event, booking = booked(BookingStatus.PAID)
        stores.events.delete(event.id)

        assert engine.synchronizer.sync(booking) is None

    def test_sync_failure_does_not_fail_status_change(
        self, engine, as_artist, booked, monkeypatch, caplog
    ):
        """Given the slot update raises, the booking still moves and the failure is counted."""
        artist, event, booking = booked()

        def broken_sync(booking):
            raise RuntimeError("event store unavailable")

        monkeypatch.setattr(engine.synchronizer, "sync", broken_sync)
        before = REGISTRY.get_sample_value("gigs_slot_sync_failures_total") or 0

        with caplog.at_level(logging.ERROR, logger="gigs"):
            updated = engine.bookings.update_status(booking.id, "in_review", as_artist(artist))

        assert updated.status is BookingStatus.IN_REVIEW
        assert engine.bookings.find_one(booking.id).status is BookingStatus.IN_REVIEW
        assert slot_status(engine, event) is SlotStatus.UNFILLED
        assert REGISTRY.get_sample_value("gigs_slot_sync_failures_total") == before + 1
        assert "Failed to sync event artist slot status" in caplog.text
