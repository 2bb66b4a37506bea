"""Tests for event slot management.

Run with: pytest tests/test_slots.py -v
"""

import logging

import pytest

from gigs.domain import ArtistSlot, ArtistStatus, BookingStatus, Resolved, SlotId, SlotRole, SlotStatus, Unresolved
from gigs.domain.errors import (
    ArtistNotActiveError,
    BookingConflictError,
    BudgetExceededError,
    DuplicateArtistError,
    ForbiddenError,
    SlotNotFoundError,
)
from gigs.services.slot_service import SlotDraft, SlotUpdate


def slot_for(artist, role=SlotRole.HEADLINER) -> ArtistSlot:
    return ArtistSlot(role=role, artist=Unresolved(artist.id))


def failing_create(*args, **kwargs):
    raise BookingConflictError(["existing"])


class TestAddSlot:
    def test_add_empty_slot(self, engine, organizer, make_event):
        event = make_event()

        updated = engine.slots.add_slot(event.id, SlotDraft(role="opener"), organizer)

        assert len(updated.artist_slots) == 1
        assert updated.artist_slots[0].role is SlotRole.OPENER
        assert updated.artist_slots[0].status is SlotStatus.UNFILLED
        assert engine.bookings.find_all() == []

    def test_add_slot_with_artist_requests_booking(self, engine, organizer, make_artist, make_event):
        artist = make_artist("P", travel_fees="50")
        event = make_event()

        updated = engine.slots.add_slot(event.id, SlotDraft(role="headliner", artist=str(artist.id)), organizer)

        assert updated.artist_slots[0].artist_id == artist.id
        [booking] = engine.bookings.find_by_artist(artist.id)
        assert booking.status is BookingStatus.REQUESTED
        assert booking.event_id == event.id
        assert booking.notes == "Booking request for headliner role in event: Summer Fest"

    def test_other_organizer_is_forbidden(self, engine, other_organizer, make_event):
        with pytest.raises(ForbiddenError, match="your own events"):
            engine.slots.add_slot(make_event().id, SlotDraft(role="opener"), other_organizer)

    def test_duplicate_artist_rejected(self, engine, organizer, make_artist, make_event):
        artist = make_artist("P")
        event = make_event(slots=(slot_for(artist),))

        with pytest.raises(DuplicateArtistError):
            engine.slots.add_slot(event.id, SlotDraft(role="opener", artist=str(artist.id)), organizer)

    def test_inactive_artist_rejected(self, engine, organizer, make_artist, make_event):
        artist = make_artist("P", status=ArtistStatus.INACTIVE)

        with pytest.raises(ArtistNotActiveError):
            engine.slots.add_slot(make_event().id, SlotDraft(role="opener", artist=str(artist.id)), organizer)

    def test_over_budget_leaves_event_untouched(self, engine, organizer, make_artist, make_event):
        p = make_artist("P", hourly_rate="100", minimum_hours="4", travel_fees="50")
        q = make_artist("Q", hourly_rate="25", minimum_hours="4")
        event = make_event(budget="500", slots=(slot_for(p),))

        with pytest.raises(BudgetExceededError):
            engine.slots.add_slot(event.id, SlotDraft(role="opener", artist=str(q.id)), organizer)

        assert len(engine.events.find_one(event.id).artist_slots) == 1
        assert engine.bookings.find_by_artist(q.id) == []

    def test_failed_booking_removes_the_new_slot(
        self, engine, organizer, make_artist, make_event, monkeypatch
    ):
        """Given the booking request fails, the slot is compensated away and the error propagates."""
        artist = make_artist("P")
        existing = ArtistSlot(role=SlotRole.SUPPORT)
        event = make_event(slots=(existing,))
        monkeypatch.setattr(engine.bookings, "create", failing_create)

        with pytest.raises(BookingConflictError):
            engine.slots.add_slot(event.id, SlotDraft(role="opener", artist=str(artist.id)), organizer)

        slots = engine.events.find_one(event.id).artist_slots
        assert [slot.id for slot in slots] == [existing.id]

    def test_failed_discard_keeps_the_booking_error(
        self, engine, organizer, make_artist, make_event, monkeypatch, caplog
    ):
        artist = make_artist("P")
        event = make_event()
        monkeypatch.setattr(engine.bookings, "create", failing_create)

        def broken_discard(*args):
            raise RuntimeError("event store unavailable")

        monkeypatch.setattr(engine.slots, "_discard_slot", broken_discard)

        with caplog.at_level(logging.ERROR, logger="gigs"):
            with pytest.raises(BookingConflictError):
                engine.slots.add_slot(event.id, SlotDraft(role="opener", artist=str(artist.id)), organizer)

        assert "Compensation broken_discard failed" in caplog.text


class TestAddSlots:
    def test_batch_adds_without_bookings(self, engine, organizer, make_artist, make_event):
        p = make_artist("P")
        q = make_artist("Q")
        event = make_event(budget="1000")

        updated = engine.slots.add_slots(
            event.id,
            [
                SlotDraft(role="headliner", artist=str(p.id)),
                SlotDraft(role="support", artist=str(q.id)),
                SlotDraft(role="opener"),
            ],
            organizer,
        )

        assert [slot.artist_id for slot in updated.artist_slots] == [p.id, q.id, None]
        assert engine.bookings.find_all() == []

    def test_duplicate_within_batch(self, engine, organizer, make_artist, make_event):
        p = make_artist("P")
        event = make_event(budget="1000")

        with pytest.raises(DuplicateArtistError, match="Duplicate artists found"):
            engine.slots.add_slots(
                event.id,
                [SlotDraft(role="headliner", artist=str(p.id)), SlotDraft(role="opener", artist=str(p.id))],
                organizer,
            )

        assert engine.events.find_one(event.id).artist_slots == ()

    def test_combined_cost_checked_once(self, engine, organizer, make_artist, make_event):
        """Given two artists that each fit alone, together they exceed the budget."""
        p = make_artist("P", hourly_rate="100", minimum_hours="3")
        q = make_artist("Q", hourly_rate="100", minimum_hours="3")
        event = make_event(budget="500")

        with pytest.raises(BudgetExceededError):
            engine.slots.add_slots(
                event.id,
                [SlotDraft(role="headliner", artist=str(p.id)), SlotDraft(role="support", artist=str(q.id))],
                organizer,
            )

        assert engine.events.find_one(event.id).artist_slots == ()


class TestUpdateSlot:
    def test_replace_artist_excludes_old_cost(self, engine, organizer, make_artist, make_event):
        p = make_artist("P", hourly_rate="100", minimum_hours="4")
        q = make_artist("Q", hourly_rate="100", minimum_hours="5")
        event = make_event(budget="500", slots=(slot_for(p),))

        updated = engine.slots.update_slot(event.id, 0, SlotUpdate(artist=str(q.id)), organizer)

        assert updated.artist_slots[0].artist_id == q.id
        assert updated.artist_slots[0].id == event.artist_slots[0].id
        assert len(engine.bookings.find_by_artist(q.id)) == 1

    def test_same_artist_does_not_rebook(self, engine, organizer, make_artist, make_event):
        p = make_artist("P")
        event = make_event(slots=(slot_for(p),))

        updated = engine.slots.update_slot(
            event.id, 0, SlotUpdate(artist=str(p.id), status="pending"), organizer
        )

        assert updated.artist_slots[0].status is SlotStatus.PENDING
        assert engine.bookings.find_all() == []

    def test_artist_on_another_slot_is_duplicate(self, engine, organizer, make_artist, make_event):
        p = make_artist("P")
        event = make_event(slots=(slot_for(p), ArtistSlot(role=SlotRole.OPENER)))

        with pytest.raises(DuplicateArtistError):
            engine.slots.update_slot(event.id, 1, SlotUpdate(artist=str(p.id)), organizer)

    def test_failed_booking_restores_previous_artist(
        self, engine, organizer, make_artist, make_event, monkeypatch
    ):
        p = make_artist("P")
        q = make_artist("Q")
        event = make_event(budget="1000", slots=(slot_for(p),))
        monkeypatch.setattr(engine.bookings, "create", failing_create)

        with pytest.raises(BookingConflictError):
            engine.slots.update_slot(event.id, 0, SlotUpdate(artist=str(q.id)), organizer)

        assert engine.events.find_one(event.id).artist_slots[0].artist_id == p.id

    def test_failed_revert_keeps_the_booking_error(
        self, engine, organizer, make_artist, make_event, monkeypatch, caplog
    ):
        """Given the revert itself fails, the caller still sees the booking error."""
        p = make_artist("P")
        q = make_artist("Q")
        event = make_event(budget="1000", slots=(slot_for(p),))
        monkeypatch.setattr(engine.bookings, "create", failing_create)

        def broken_restore(*args):
            raise RuntimeError("event store unavailable")

        monkeypatch.setattr(engine.slots, "_restore_artist", broken_restore)

        with caplog.at_level(logging.ERROR, logger="gigs"):
            with pytest.raises(BookingConflictError):
                engine.slots.update_slot(event.id, 0, SlotUpdate(artist=str(q.id)), organizer)

        assert "Compensation broken_restore failed" in caplog.text

    def test_unknown_index(self, engine, organizer, make_event):
        with pytest.raises(SlotNotFoundError, match="index 3"):
            engine.slots.update_slot(make_event().id, 3, SlotUpdate(status="pending"), organizer)


class TestRemoveSlot:
    def test_later_slots_shift_down(self, engine, organizer, make_event):
        first = ArtistSlot(role=SlotRole.HEADLINER)
        second = ArtistSlot(role=SlotRole.SUPPORT)
        third = ArtistSlot(role=SlotRole.OPENER)
        event = make_event(slots=(first, second, third))

        updated = engine.slots.remove_slot(event.id, 1, organizer)

        assert [slot.id for slot in updated.artist_slots] == [first.id, third.id]
        assert updated.slot_at(1).id == third.id

    def test_non_owner_cannot_remove(self, engine, other_organizer, make_event):
        event = make_event(slots=(ArtistSlot(role=SlotRole.OPENER),))

        with pytest.raises(ForbiddenError):
            engine.slots.remove_slot(event.id, 0, other_organizer)


class TestUpdateSlotStatusOnly:
    def test_by_index_and_by_id(self, engine, make_event):
        slot = ArtistSlot(role=SlotRole.OPENER)
        event = make_event(slots=(slot,))

        engine.slots.update_slot_status_only(event.id, 0, SlotStatus.PENDING)
        updated = engine.slots.update_slot_status_only(event.id, slot.id, SlotStatus.CONFIRMED)

        assert updated.artist_slots[0].status is SlotStatus.CONFIRMED

    def test_unknown_slot_id(self, engine, make_event):
        with pytest.raises(SlotNotFoundError):
            engine.slots.update_slot_status_only(make_event().id, SlotId.new(), SlotStatus.PENDING)


class TestResolveArtists:
    def test_resolution_is_read_only_and_repeatable(self, engine, make_artist, make_event):
        p = make_artist("P")
        event = make_event(slots=(slot_for(p),))

        first = engine.events.find_one(event.id, resolve=True)
        second = engine.events.find_one(event.id, resolve=True)

        assert isinstance(first.artist_slots[0].artist, Resolved)
        assert first.artist_slots[0].artist.artist.name == "P"
        assert first == second
        assert isinstance(engine.events.find_one(event.id).artist_slots[0].artist, Unresolved)
