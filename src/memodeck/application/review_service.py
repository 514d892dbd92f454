"""
Review submission on behalf of a caller.

The scheduler itself is total and never rejects input. Everything a caller
must check before handing a rating to it (rating literal, suspension, stale
state) lives here.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime

from memodeck.domain.models import Card, Rating, ReviewLogEntry

from .scheduler import transition, utcnow

logger = logging.getLogger(__name__)


class InvalidRatingError(ValueError):
    pass


class SuspendedCardError(ValueError):
    pass


class StaleStateError(ValueError):
    """The card changed since the caller read it (another session rated it)."""


class CardNotFoundError(ValueError):
    pass


@dataclass(frozen=True)
class ReviewOutcome:
    card: Card
    log_entry: ReviewLogEntry


def parse_rating(value: str | Rating) -> Rating:
    """Parse one of the exact literals again|hard|good|easy."""
    if isinstance(value, Rating):
        return value
    try:
        return Rating(value)
    except ValueError:
        valid = ", ".join(r.value for r in Rating)
        raise InvalidRatingError(f"Invalid rating '{value}'. Expected one of: {valid}") from None


def find_card(cards: list[Card], card_id: str) -> Card:
    for card in cards:
        if card.id == card_id:
            return card
    raise CardNotFoundError(f"Card {card_id} not found")


class ReviewService:
    """
    Applies ratings to cards and produces the log entries the caller stores.

    Stateless; the caller owns persistence and persists both the returned
    card and the log entry.
    """

    def submit(
        self,
        card: Card,
        rating: str | Rating,
        now: datetime | None = None,
        expected_version: int | None = None,
    ) -> ReviewOutcome:
        """
        Rate a card.

        Args:
            card: The card being reviewed.
            rating: Rating literal or Rating member.
            now: Review time; defaults to the current UTC time.
            expected_version: If given, the state version the caller read.
                A mismatch raises StaleStateError instead of overwriting.

        Returns:
            ReviewOutcome with the updated card and its review log entry.
        """
        parsed = parse_rating(rating)

        if card.suspended:
            raise SuspendedCardError(f"Cannot review suspended card {card.id}")

        if expected_version is not None and expected_version != card.state.version:
            raise StaleStateError(
                f"Card {card.id} is at version {card.state.version}, "
                f"expected {expected_version}"
            )

        now = now or utcnow()
        new_state = transition(card.state, parsed, now)
        updated = replace(card, state=new_state)

        entry = ReviewLogEntry(
            card_id=card.id,
            rating=parsed,
            reviewed_at=now,
            scheduled_interval=new_state.interval,
            new_ease_factor=new_state.ease_factor,
            deck_id=card.deck_id,
        )

        logger.info(
            f"Reviewed {card.id} as {parsed.value}; next in {new_state.interval} day(s)"
        )
        return ReviewOutcome(card=updated, log_entry=entry)
