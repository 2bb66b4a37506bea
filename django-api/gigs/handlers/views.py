"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from gigs.domain import Actor, Role, UserId
from gigs.domain.errors import DomainError, ErrorKind, ForbiddenError
from gigs.handlers.serializers import (
    ArtistSerializer,
    AvailabilityInputSerializer,
    BookingInputSerializer,
    BookingSerializer,
    BookingStatusInputSerializer,
    BookingUpdateInputSerializer,
    EventInputSerializer,
    EventSerializer,
    EventStatusInputSerializer,
    EventUpdateInputSerializer,
    SlotBatchInputSerializer,
    SlotInputSerializer,
    SlotUpdateInputSerializer,
)
from gigs.services import Engine, build_engine
from gigs.services.booking_service import BookingChanges, BookingDraft
from gigs.services.event_service import EventChanges, EventDraft
from gigs.services.slot_service import SlotDraft, SlotUpdate
from gigs.stores.django_store import DjangoArtistStore, DjangoBookingStore, DjangoEventStore

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
}


def get_engine() -> Engine:
    return build_engine(DjangoEventStore(), DjangoBookingStore(), DjangoArtistStore())


def actor_from_request(request: Request) -> Actor:
    """Build the core's view of the authenticated user."""
    user = request.user
    if user.is_superuser:
        return Actor(id=UserId(str(user.pk)), role=Role.ADMIN)
    profile = getattr(user, "gig_profile", None)
    if profile is None:
        raise ForbiddenError("User has no booking role")
    return Actor(id=UserId(str(user.pk)), role=Role.parse(profile.role))


class EngineView(APIView):
    """Base view: wires the engine and maps domain errors to responses."""

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        self.engine = get_engine()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            logger.info("Request rejected: %s", exc)
            return Response(exc.to_dict(), status=STATUS_BY_KIND[exc.kind])
        return super().handle_exception(exc)

    def actor(self) -> Actor:
        return actor_from_request(self.request)


def _validated(serializer_class, data, **kwargs) -> dict:
    serializer = serializer_class(data=data, **kwargs)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


def _slot_draft(data: dict) -> SlotDraft:
    return SlotDraft(role=data["role"], artist=data.get("artist") or None, status=data.get("status"))


# Events


class EventListView(EngineView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        if request.query_params.get("mine"):
            events = self.engine.events.find_by_organizer(self.actor().id)
        else:
            events = self.engine.events.find_all()
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(EventInputSerializer, request.data)
        draft = EventDraft(
            title=data["title"],
            venue=data["venue"],
            date=data["date"],
            budget=data["budget"],
            description=data["description"],
            requirements=data["requirements"],
            artist_slots=[_slot_draft(slot) for slot in data["artist_slots"]],
            status=data.get("status"),
        )
        event = self.engine.events.create(draft, self.actor())
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(EngineView):
    """Handler for GET/PATCH/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = self.engine.events.find_one(event_id, resolve=True)
        return Response(EventSerializer(event).data)

    def patch(self, request: Request, event_id: str) -> Response:
        data = _validated(EventUpdateInputSerializer, request.data)
        event = self.engine.events.update(event_id, EventChanges(**data), self.actor())
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        event = self.engine.events.remove(event_id, self.actor())
        return Response(EventSerializer(event).data)


class EventStatusView(EngineView):
    """Handler for POST /api/events/{event_id}/status"""

    def post(self, request: Request, event_id: str) -> Response:
        data = _validated(EventStatusInputSerializer, request.data)
        event = self.engine.events.update_status(event_id, data["status"], self.actor())
        return Response(EventSerializer(event).data)


# Slots


class SlotListView(EngineView):
    """Handler for POST /api/events/{event_id}/slots"""

    def post(self, request: Request, event_id: str) -> Response:
        data = _validated(SlotInputSerializer, request.data)
        event = self.engine.slots.add_slot(event_id, _slot_draft(data), self.actor())
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class SlotBatchView(EngineView):
    """Handler for POST /api/events/{event_id}/slots/batch"""

    def post(self, request: Request, event_id: str) -> Response:
        data = _validated(SlotBatchInputSerializer, request.data)
        drafts = [_slot_draft(slot) for slot in data["slots"]]
        event = self.engine.slots.add_slots(event_id, drafts, self.actor())
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class SlotDetailView(EngineView):
    """Handler for PATCH/DELETE /api/events/{event_id}/slots/{index}"""

    def patch(self, request: Request, event_id: str, index: int) -> Response:
        data = _validated(SlotUpdateInputSerializer, request.data)
        update = SlotUpdate(artist=data.get("artist") or None, status=data.get("status"))
        event = self.engine.slots.update_slot(event_id, index, update, self.actor())
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str, index: int) -> Response:
        event = self.engine.slots.remove_slot(event_id, index, self.actor())
        return Response(EventSerializer(event).data)


# Bookings


class BookingListView(EngineView):
    """Handler for GET/POST /api/bookings"""

    def get(self, request: Request) -> Response:
        bookings = self.engine.bookings.find_for_actor(self.actor())
        return Response(BookingSerializer(bookings, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(BookingInputSerializer, request.data)
        draft = BookingDraft(
            artist_id=data["artist"],
            event_id=data["event"],
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            payment_amount=data.get("payment_amount"),
            transaction_id=data.get("transaction_id") or None,
            notes=data["notes"],
            status=data.get("status"),
        )
        booking = self.engine.bookings.create(draft, self.actor())
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingDetailView(EngineView):
    """Handler for GET/PATCH/DELETE /api/bookings/{booking_id}"""

    def get(self, request: Request, booking_id: str) -> Response:
        booking = self.engine.bookings.find_one(booking_id)
        return Response(BookingSerializer(booking).data)

    def patch(self, request: Request, booking_id: str) -> Response:
        data = _validated(BookingUpdateInputSerializer, request.data)
        booking = self.engine.bookings.update(booking_id, BookingChanges(**data), self.actor())
        return Response(BookingSerializer(booking).data)

    def delete(self, request: Request, booking_id: str) -> Response:
        booking = self.engine.bookings.remove(booking_id, self.actor())
        return Response(BookingSerializer(booking).data)


class BookingStatusView(EngineView):
    """Handler for POST /api/bookings/{booking_id}/status"""

    def post(self, request: Request, booking_id: str) -> Response:
        data = _validated(BookingStatusInputSerializer, request.data)
        booking = self.engine.bookings.update_status(
            booking_id, data["status"], self.actor(), notes=data.get("notes")
        )
        return Response(BookingSerializer(booking).data)


# Artists


class ArtistDetailView(EngineView):
    """Handler for GET /api/artists/{artist_id}"""

    def get(self, request: Request, artist_id: str) -> Response:
        artist = self.engine.artists.find_by_id(artist_id)
        return Response(ArtistSerializer(artist).data)


class ArtistAvailabilityView(EngineView):
    """Handler for PUT /api/artists/{artist_id}/availability"""

    def put(self, request: Request, artist_id: str) -> Response:
        data = _validated(AvailabilityInputSerializer, request.data)
        entries = [(entry["date"], entry["is_available"]) for entry in data["entries"]]
        artist = self.engine.artists.update_availability(artist_id, entries, self.actor())
        return Response(ArtistSerializer(artist).data)
