"""Service for minting card ids and fresh cards."""

import logging
from collections.abc import Iterable
from datetime import datetime

from ulid import ULID

from memodeck.domain.models import Card, MemoryState

from .scheduler import utcnow

logger = logging.getLogger(__name__)


def generate_card_id() -> str:
    """Generate a stable, sortable card id using ULID."""
    return f"card_{ULID()}"


def new_card(
    front: str,
    back: str | None = None,
    media_urls: Iterable[str] = (),
    tags: Iterable[str] = (),
    deck_id: str | None = None,
    now: datetime | None = None,
) -> Card:
    """
    Create a card with default memory state, due immediately.
    """
    card = Card(
        id=generate_card_id(),
        state=MemoryState.initial(now or utcnow()),
        front=front,
        back=back,
        media_urls=list(media_urls),
        tags=list(tags),
        deck_id=deck_id,
    )
    logger.debug(f"Created {card.id}")
    return card
