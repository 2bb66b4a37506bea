"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
Slots, status history and availability are nested lists stored as JSON
columns, so each aggregate is written as a single row.
"""

import uuid

from django.conf import settings
from django.db import models


class UserProfile(models.Model):
    """Role of a user in the booking platform."""

    class Role(models.TextChoices):
        ARTIST = "artist"
        ORGANIZER = "organizer"
        ADMIN = "admin"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="gig_profile"
    )
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.ARTIST)

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"


class Artist(models.Model):
    """Persistence model for artist profiles."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=255)
    status = models.CharField(max_length=20, default="pending_review")
    genres = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True)
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2)
    minimum_hours = models.DecimalField(max_digits=6, decimal_places=2)
    travel_fees = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    availability = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organizer_id = models.CharField(max_length=64, db_index=True)
    title = models.CharField(max_length=255)
    venue = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    requirements = models.TextField(blank=True)
    date = models.DateTimeField()
    budget = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, default="draft")
    artist_slots = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="gigs_event_created_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    artist_id = models.UUIDField(db_index=True)
    event_id = models.UUIDField(db_index=True)
    organizer_id = models.CharField(max_length=64, db_index=True)
    status = models.CharField(max_length=20, default="requested")
    status_history = models.JSONField(default=list)
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)
    payment = models.JSONField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["artist_id", "status"], name="gigs_booking_artist_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.artist_id} @ {self.event_id} ({self.status})"
