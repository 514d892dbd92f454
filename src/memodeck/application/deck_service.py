"""Deck-wide maintenance operations."""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from memodeck.domain.models import Card, MemoryState

from .scheduler import utcnow

logger = logging.getLogger(__name__)


def reset_cards(cards: Iterable[Card], now: datetime | None = None) -> list[Card]:
    """
    Return every card back to new status: default state, due immediately,
    no review history and unsuspended.

    The state version keeps counting so stale writers are still detected.
    """
    now = now or utcnow()
    reset: list[Card] = []
    for card in cards:
        fresh = replace(MemoryState.initial(now), version=card.state.version + 1)
        reset.append(replace(card, state=fresh))

    logger.info(f"Reset {len(reset)} card(s)")
    return reset

