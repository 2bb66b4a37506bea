"""Prometheus metrics for the booking engine."""

from prometheus_client import CollectorRegistry, Counter

# Kept off the process-wide default registry.
REGISTRY = CollectorRegistry()

slot_sync_failures_total = Counter(
    "gigs_slot_sync_failures_total",
    "Booking status changes whose event slot could not be updated",
    registry=REGISTRY,
)

bookings_created_total = Counter(
    "gigs_bookings_created_total",
    "Bookings created",
    registry=REGISTRY,
)
