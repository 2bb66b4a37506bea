"""Django ORM implementation of the stores.

Each aggregate maps to one row; nested collections live in JSON columns
and are converted to domain models here.
"""

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal

from django.db import transaction

from gigs import models as orm
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
    EventStatus,
    Money,
    Payment,
    Pricing,
    SlotId,
    SlotRole,
    SlotStatus,
    StatusChange,
    Unresolved,
    UserId,
)
from gigs.stores.interfaces import ArtistStore, BookingStore, EventStore


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def get(self, key: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=key.value).first()
        return self._to_domain(row) if row else None

    def save(self, document: Event) -> Event:
        with transaction.atomic():
            orm.Event.objects.update_or_create(
                pk=document.id.value,
                defaults={
                    "organizer_id": str(document.organizer_id),
                    "title": document.title,
                    "venue": document.venue,
                    "description": document.description,
                    "requirements": document.requirements,
                    "date": document.date,
                    "budget": document.budget.amount,
                    "status": document.status.value,
                    "artist_slots": [self._slot_to_json(slot) for slot in document.artist_slots],
                    "created_at": document.created_at,
                    "updated_at": document.updated_at,
                },
            )
        return document

    def delete(self, key: EventId) -> bool:
        deleted, _ = orm.Event.objects.filter(pk=key.value).delete()
        return deleted > 0

    def list_all(self) -> list[Event]:
        return [self._to_domain(row) for row in orm.Event.objects.all()]

    def find_by_organizer(self, organizer_id: UserId) -> list[Event]:
        rows = orm.Event.objects.filter(organizer_id=str(organizer_id))
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _slot_to_json(slot: ArtistSlot) -> dict:
        return {
            "id": str(slot.id),
            "role": slot.role.value,
            "artist": str(slot.artist_id) if slot.artist_id else None,
            "status": slot.status.value,
        }

    @staticmethod
    def _to_domain(row: orm.Event) -> Event:
        slots = tuple(
            ArtistSlot(
                id=SlotId.from_string(item["id"]),
                role=SlotRole(item["role"]),
                artist=Unresolved(ArtistId.from_string(item["artist"])) if item.get("artist") else None,
                status=SlotStatus(item.get("status", SlotStatus.UNFILLED.value)),
            )
            for item in row.artist_slots
        )
        return Event(
            id=EventId(row.id),
            organizer_id=UserId(row.organizer_id),
            title=row.title,
            venue=row.venue,
            date=row.date,
            budget=Money(row.budget),
            description=row.description,
            requirements=row.requirements,
            artist_slots=slots,
            status=EventStatus(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class DjangoBookingStore(BookingStore):
    """Database-backed booking store using Django ORM."""

    def get(self, key: BookingId) -> Booking | None:
        row = orm.Booking.objects.filter(pk=key.value).first()
        return self._to_domain(row) if row else None

    def save(self, document: Booking) -> Booking:
        payment = None
        if document.payment is not None:
            payment = {
                "amount": str(document.payment.amount.amount),
                "is_paid": document.payment.is_paid,
                "paid_date": _iso(document.payment.paid_date),
                "transaction_id": document.payment.transaction_id,
            }
        with transaction.atomic():
            orm.Booking.objects.update_or_create(
                pk=document.id.value,
                defaults={
                    "artist_id": document.artist_id.value,
                    "event_id": document.event_id.value,
                    "organizer_id": str(document.organizer_id),
                    "status": document.status.value,
                    "status_history": [
                        {
                            "status": change.status.value,
                            "timestamp": _iso(change.timestamp),
                            "changed_by": str(change.changed_by),
                        }
                        for change in document.status_history
                    ],
                    "start_time": document.start_time,
                    "end_time": document.end_time,
                    "payment": payment,
                    "notes": document.notes,
                    "created_at": document.created_at,
                    "updated_at": document.updated_at,
                },
            )
        return document

    def delete(self, key: BookingId) -> bool:
        deleted, _ = orm.Booking.objects.filter(pk=key.value).delete()
        return deleted > 0

    def list_all(self) -> list[Booking]:
        return [self._to_domain(row) for row in orm.Booking.objects.all()]

    def find_by_artist(
        self,
        artist_id: ArtistId,
        statuses: Iterable[BookingStatus] | None = None,
    ) -> list[Booking]:
        rows = orm.Booking.objects.filter(artist_id=artist_id.value)
        if statuses is not None:
            rows = rows.filter(status__in=[status.value for status in statuses])
        return [self._to_domain(row) for row in rows]

    def find_by_organizer(self, organizer_id: UserId) -> list[Booking]:
        rows = orm.Booking.objects.filter(organizer_id=str(organizer_id))
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row: orm.Booking) -> Booking:
        payment = None
        if row.payment:
            payment = Payment(
                amount=Money(Decimal(row.payment["amount"])),
                is_paid=bool(row.payment.get("is_paid")),
                paid_date=_parse_dt(row.payment.get("paid_date")),
                transaction_id=row.payment.get("transaction_id"),
            )
        return Booking(
            id=BookingId(row.id),
            artist_id=ArtistId(row.artist_id),
            event_id=EventId(row.event_id),
            organizer_id=UserId(row.organizer_id),
            status=BookingStatus(row.status),
            status_history=tuple(
                StatusChange(
                    status=BookingStatus(item["status"]),
                    timestamp=_parse_dt(item["timestamp"]),
                    changed_by=UserId(item["changed_by"]),
                )
                for item in row.status_history
            ),
            start_time=row.start_time,
            end_time=row.end_time,
            payment=payment,
            notes=row.notes,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class DjangoArtistStore(ArtistStore):
    """Database-backed artist registry using Django ORM."""

    def get(self, key: ArtistId) -> Artist | None:
        row = orm.Artist.objects.filter(pk=key.value).first()
        return self._to_domain(row) if row else None

    def get_by_user_id(self, user_id: UserId) -> Artist | None:
        row = orm.Artist.objects.filter(user_id=str(user_id)).first()
        return self._to_domain(row) if row else None

    def save(self, document: Artist) -> Artist:
        pricing = document.pricing
        with transaction.atomic():
            orm.Artist.objects.update_or_create(
                pk=document.id.value,
                defaults={
                    "user_id": str(document.user_id),
                    "name": document.name,
                    "status": document.status.value,
                    "genres": list(document.genres),
                    "description": document.description,
                    "hourly_rate": pricing.hourly_rate.amount,
                    "minimum_hours": pricing.minimum_hours,
                    "travel_fees": pricing.travel_fees.amount if pricing.travel_fees else None,
                    "availability": [
                        {"date": entry.date.isoformat(), "is_available": entry.is_available}
                        for entry in document.availability
                    ],
                },
            )
        return document

    def delete(self, key: ArtistId) -> bool:
        deleted, _ = orm.Artist.objects.filter(pk=key.value).delete()
        return deleted > 0

    def list_all(self) -> list[Artist]:
        return [self._to_domain(row) for row in orm.Artist.objects.all()]

    @staticmethod
    def _to_domain(row: orm.Artist) -> Artist:
        return Artist(
            id=ArtistId(row.id),
            user_id=UserId(row.user_id),
            name=row.name,
            status=ArtistStatus(row.status),
            genres=tuple(row.genres or ()),
            description=row.description,
            pricing=Pricing(
                hourly_rate=Money(row.hourly_rate),
                minimum_hours=Decimal(row.minimum_hours),
                travel_fees=Money(row.travel_fees) if row.travel_fees is not None else None,
            ),
            availability=tuple(
                Availability(date=date.fromisoformat(item["date"]), is_available=bool(item["is_available"]))
                for item in row.availability or ()
            ),
        )
