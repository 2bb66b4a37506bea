"""Artist registry operations: profiles, moderation status and availability."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from gigs.domain import Actor, Artist, ArtistId, ArtistStatus, Availability, Money, Pricing, UserId
from gigs.domain.errors import ArtistNotFoundError, ForbiddenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtistDraft:
    name: str
    hourly_rate: Decimal
    minimum_hours: Decimal
    travel_fees: Decimal | None = None
    genres: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class ArtistChanges:
    name: str | None = None
    hourly_rate: Decimal | None = None
    minimum_hours: Decimal | None = None
    travel_fees: Decimal | None = None
    genres: tuple[str, ...] | None = None
    description: str | None = None


class ArtistService:
    def __init__(self, artists) -> None:
        self._artists = artists

    def find_by_id(self, artist_id: str | ArtistId) -> Artist:
        key = ArtistId.coerce(artist_id)
        artist = self._artists.get(key)
        if artist is None:
            raise ArtistNotFoundError(str(key))
        return artist

    def find_by_user_id(self, user_id: UserId) -> Artist:
        artist = self._artists.get_by_user_id(user_id)
        if artist is None:
            raise ArtistNotFoundError(f"user:{user_id}")
        return artist

    def find_all(self, status: str | None = None) -> list[Artist]:
        if status is None:
            return self._artists.list_all()
        wanted = ArtistStatus.parse(status)
        return self._artists.find(lambda artist: artist.status is wanted)

    def create(self, draft: ArtistDraft, actor: Actor) -> Artist:
        """Register a profile for the acting user; it starts pending review."""
        artist = Artist(
            id=ArtistId.new(),
            user_id=actor.id,
            name=draft.name,
            pricing=_pricing(draft.hourly_rate, draft.minimum_hours, draft.travel_fees),
            genres=tuple(draft.genres),
            description=draft.description,
        )
        logger.info("Artist profile %s registered for user %s", artist.id, actor.id)
        return self._artists.save(artist)

    def update(self, artist_id: str | ArtistId, changes: ArtistChanges, actor: Actor) -> Artist:
        """Edit a profile. Non-admin edits send the profile back to review."""
        artist = self._owned(artist_id, actor, "You can only update your own profile")
        pricing = artist.pricing
        updated = replace(
            artist,
            name=changes.name if changes.name is not None else artist.name,
            genres=tuple(changes.genres) if changes.genres is not None else artist.genres,
            description=changes.description if changes.description is not None else artist.description,
            pricing=_pricing(
                changes.hourly_rate if changes.hourly_rate is not None else pricing.hourly_rate.amount,
                changes.minimum_hours if changes.minimum_hours is not None else pricing.minimum_hours,
                changes.travel_fees
                if changes.travel_fees is not None
                else (pricing.travel_fees.amount if pricing.travel_fees else None),
            ),
        )
        if not actor.is_admin:
            updated = replace(updated, status=ArtistStatus.PENDING_REVIEW)
        return self._artists.save(updated)

    def update_status(self, artist_id: str | ArtistId, status: str | ArtistStatus, actor: Actor) -> Artist:
        if not actor.is_admin:
            raise ForbiddenError("Only admins can change an artist's status")
        return self._set_status(self.find_by_id(artist_id), ArtistStatus.parse(status))

    def update_availability(
        self,
        artist_id: str | ArtistId,
        entries: list[tuple[date, bool]],
        actor: Actor,
    ) -> Artist:
        """Merge availability by calendar day."""
        artist = self._owned(artist_id, actor, "You can only update your own availability")
        updates = [Availability(date=day, is_available=available) for day, available in entries]
        return self._artists.save(artist.with_availability(updates))

    def remove(self, artist_id: str | ArtistId, actor: Actor) -> Artist:
        """Admins delete profiles; owners only deactivate theirs."""
        artist = self._owned(artist_id, actor, "You can only delete your own profile")
        if not actor.is_admin:
            return self._set_status(artist, ArtistStatus.INACTIVE)
        if not self._artists.delete(artist.id):
            raise ArtistNotFoundError(str(artist.id))
        logger.info("Artist profile %s deleted by %s", artist.id, actor.id)
        return artist

    def _owned(self, artist_id: str | ArtistId, actor: Actor, message: str) -> Artist:
        artist = self.find_by_id(artist_id)
        if not actor.is_admin and artist.user_id != actor.id:
            raise ForbiddenError(message)
        return artist

    def _set_status(self, artist: Artist, status: ArtistStatus) -> Artist:
        logger.info("Artist %s status %s -> %s", artist.id, artist.status.value, status.value)
        return self._artists.save(replace(artist, status=status))


def _pricing(hourly_rate, minimum_hours, travel_fees) -> Pricing:
    return Pricing(
        hourly_rate=Money(hourly_rate),
        minimum_hours=Decimal(str(minimum_hours)),
        travel_fees=Money(travel_fees) if travel_fees is not None else None,
    )
