"""Budget validation for artist assignments.

Pure with respect to the stores: it only reads the artist registry.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from gigs.domain import ArtistId, Event, Money, SlotId
from gigs.domain.errors import ArtistNotFoundError, BudgetExceededError
from gigs.stores.interfaces import ArtistStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostLine:
    artist_id: ArtistId
    name: str
    cost: Money
    minimum_hours: Decimal


@dataclass(frozen=True)
class BudgetReport:
    allocated: Money
    budget: Money
    breakdown: tuple[CostLine, ...]

    @property
    def fits(self) -> bool:
        return self.allocated <= self.budget

    @property
    def remaining(self) -> Money | None:
        if not self.fits:
            return None
        return Money(self.budget.amount - self.allocated.amount)


class BudgetValidator:
    """Sums resolved artist costs against an event's budget ceiling."""

    def __init__(self, artists: ArtistStore) -> None:
        self._artists = artists

    def assess(
        self,
        event: Event,
        candidates: Iterable[ArtistId] = (),
        excluded_slots: Iterable[SlotId] = (),
    ) -> BudgetReport:
        excluded = frozenset(excluded_slots)
        lines: list[CostLine] = []

        for slot in event.artist_slots:
            if slot.id in excluded or slot.artist_id is None:
                continue
            artist = self._artists.get(slot.artist_id)
            if artist is None:
                # Stale reference; it no longer counts against the budget.
                logger.debug("Artist not found for ID: %s", slot.artist_id)
                continue
            lines.append(self._line(artist))

        for artist_id in candidates:
            artist = self._artists.get(artist_id)
            if artist is None:
                raise ArtistNotFoundError(str(artist_id))
            lines.append(self._line(artist))

        allocated = Money.zero()
        for line in lines:
            allocated = allocated + line.cost
        return BudgetReport(allocated=allocated, budget=event.budget, breakdown=tuple(lines))

    def validate(
        self,
        event: Event,
        candidates: Iterable[ArtistId] = (),
        excluded_slots: Iterable[SlotId] = (),
    ) -> BudgetReport:
        """Like ``assess`` but raises BudgetExceededError when over budget."""
        report = self.assess(event, candidates, excluded_slots)
        if not report.fits:
            logger.info(
                "Budget exceeded for event %s: allocated=%s budget=%s",
                event.id,
                report.allocated,
                report.budget,
            )
            raise BudgetExceededError(report.allocated, report.budget, report.breakdown)
        return report

    @staticmethod
    def _line(artist) -> CostLine:
        return CostLine(
            artist_id=artist.id,
            name=artist.name,
            cost=artist.cost(),
            minimum_hours=artist.pricing.minimum_hours,
        )
