"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from gigs.domain import BookingStatus, EventStatus, Resolved, SlotRole, SlotStatus

SLOT_ROLES = [role.value for role in SlotRole]
SLOT_STATUSES = [status.value for status in SlotStatus]
EVENT_STATUSES = [status.value for status in EventStatus]
BOOKING_STATUSES = [status.value for status in BookingStatus]


# Output


class AvailabilitySerializer(serializers.Serializer):
    date = serializers.DateField()
    is_available = serializers.BooleanField()


class PricingSerializer(serializers.Serializer):
    hourly_rate = serializers.DecimalField(source="hourly_rate.amount", max_digits=10, decimal_places=2)
    minimum_hours = serializers.DecimalField(max_digits=6, decimal_places=2)
    travel_fees = serializers.SerializerMethodField()

    def get_travel_fees(self, pricing) -> str | None:
        return str(pricing.travel_fees) if pricing.travel_fees is not None else None


class ArtistSerializer(serializers.Serializer):
    """Serializer for Artist domain model."""

    id = serializers.CharField()
    user_id = serializers.CharField()
    name = serializers.CharField()
    status = serializers.CharField(source="status.value")
    genres = serializers.ListField(child=serializers.CharField())
    description = serializers.CharField()
    pricing = PricingSerializer()
    cost = serializers.SerializerMethodField()
    availability = AvailabilitySerializer(many=True)

    def get_cost(self, artist) -> str:
        return str(artist.cost())


class ArtistSlotSerializer(serializers.Serializer):
    """Serializer for ArtistSlot; a resolved artist is nested, otherwise only its id."""

    id = serializers.CharField()
    role = serializers.CharField(source="role.value")
    status = serializers.CharField(source="status.value")
    artist = serializers.SerializerMethodField()

    def get_artist(self, slot):
        if slot.artist is None:
            return None
        if isinstance(slot.artist, Resolved):
            return ArtistSerializer(slot.artist.artist).data
        return str(slot.artist.artist_id)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    organizer_id = serializers.CharField()
    title = serializers.CharField()
    venue = serializers.CharField()
    description = serializers.CharField()
    requirements = serializers.CharField()
    date = serializers.DateTimeField()
    budget = serializers.DecimalField(source="budget.amount", max_digits=12, decimal_places=2)
    status = serializers.CharField(source="status.value")
    artist_slots = ArtistSlotSerializer(many=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class StatusChangeSerializer(serializers.Serializer):
    status = serializers.CharField(source="status.value")
    timestamp = serializers.DateTimeField()
    changed_by = serializers.CharField()


class PaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(source="amount.amount", max_digits=12, decimal_places=2)
    is_paid = serializers.BooleanField()
    paid_date = serializers.DateTimeField(allow_null=True)
    transaction_id = serializers.CharField(allow_null=True)


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField()
    artist_id = serializers.CharField()
    event_id = serializers.CharField()
    organizer_id = serializers.CharField()
    status = serializers.CharField(source="status.value")
    status_history = StatusChangeSerializer(many=True)
    start_time = serializers.DateTimeField(allow_null=True)
    end_time = serializers.DateTimeField(allow_null=True)
    payment = PaymentSerializer(allow_null=True)
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


# Input


class SlotInputSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=SLOT_ROLES)
    artist = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    status = serializers.ChoiceField(choices=SLOT_STATUSES, required=False)


class SlotBatchInputSerializer(serializers.Serializer):
    slots = SlotInputSerializer(many=True, allow_empty=False)


class SlotUpdateInputSerializer(serializers.Serializer):
    artist = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    status = serializers.ChoiceField(choices=SLOT_STATUSES, required=False)


class EventInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    venue = serializers.CharField(max_length=255)
    date = serializers.DateTimeField()
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    requirements = serializers.CharField(required=False, allow_blank=True, default="")
    artist_slots = SlotInputSerializer(many=True, required=False, default=list)
    status = serializers.ChoiceField(choices=EVENT_STATUSES, required=False)


class EventUpdateInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    venue = serializers.CharField(max_length=255, required=False)
    date = serializers.DateTimeField(required=False)
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    requirements = serializers.CharField(required=False, allow_blank=True)


class EventStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=EVENT_STATUSES)


class BookingInputSerializer(serializers.Serializer):
    artist = serializers.CharField()
    event = serializers.CharField()
    start_time = serializers.DateTimeField(required=False, allow_null=True)
    end_time = serializers.DateTimeField(required=False, allow_null=True)
    payment_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    transaction_id = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    status = serializers.ChoiceField(choices=BOOKING_STATUSES, required=False)


class BookingUpdateInputSerializer(serializers.Serializer):
    start_time = serializers.DateTimeField(required=False)
    end_time = serializers.DateTimeField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    payment_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=BOOKING_STATUSES, required=False)


class BookingStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BOOKING_STATUSES)
    notes = serializers.CharField(required=False, allow_blank=True)


class AvailabilityInputSerializer(serializers.Serializer):
    entries = AvailabilitySerializer(many=True, allow_empty=False)
