"""
Metrics calculator for deck summaries and per-card insights.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from memodeck.domain.models import Card, DeckStats


@dataclass
class CardMetrics:
    """
    Card state enriched with computed metrics.
    """

    card_id: str
    ease_factor: float
    interval: int
    repetitions: int
    lapse_count: int
    suspended: bool

    # Computed metrics
    lapse_rate: float | None  # lapses / reviews
    days_overdue: int | None  # Negative if not yet due


class MetricsCalculator:
    """
    Computes deck summaries and per-card metrics from memory states.

    Stateless and side-effect free. Uses the same predicates as the queue
    selector but applies no caps.
    """

    def summarize(self, cards: Iterable[Card], now: datetime) -> DeckStats:
        stats = DeckStats()
        for card in cards:
            stats.total += 1
            state = card.state

            if state.suspended:
                stats.suspended += 1
            elif state.is_new:
                stats.new += 1
            elif not state.is_due(now):
                continue
            elif state.is_learning:
                stats.learning += 1
            else:
                stats.review += 1

        return stats

    def enrich(self, card: Card, now: datetime) -> CardMetrics:
        return CardMetrics(
            card_id=card.id,
            ease_factor=card.state.ease_factor,
            interval=card.state.interval,
            repetitions=card.state.repetitions,
            lapse_count=card.state.lapse_count,
            suspended=card.state.suspended,
            lapse_rate=self._compute_lapse_rate(card),
            days_overdue=self._compute_days_overdue(card, now),
        )

    def _compute_lapse_rate(self, card: Card) -> float | None:
        """
        Compute lapse rate as lapses / total reviews.

        Total reviews is the current success streak plus every lapse; earlier
        streaks are not recoverable from the state alone, so this overstates
        the rate for cards that lapsed after long streaks.
        """
        reviews = card.state.repetitions + card.state.lapse_count
        if reviews == 0:
            return None
        return card.state.lapse_count / reviews

    def _compute_days_overdue(self, card: Card, now: datetime) -> int | None:
        """
        Whole days past the due time (negative if not yet due).

        None for cards that have never been reviewed.
        """
        if card.state.last_reviewed_at is None:
            return None
        return (now - card.state.due_at).days
