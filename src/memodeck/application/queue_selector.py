"""
Daily review-queue selection.

Partitions a deck's cards into three disjoint lists:
1. new      - never reviewed, capped by the deck's daily new limit
2. learning - lapsed cards relearning from zero repetitions, fixed cap
3. due      - scheduled reviews whose due time has passed, capped by the
              remaining daily review budget

Suspended cards never appear in any list.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from memodeck.domain.constants import LEARNING_QUEUE_CAP
from memodeck.domain.models import Card, DeckLimits, ReviewQueue

logger = logging.getLogger(__name__)


def remaining_review_budget(daily_review_limit: int, reviews_done_today: int) -> int:
    """Reviews still allowed today; never negative."""
    return max(0, daily_review_limit - reviews_done_today)


def select_queue(
    cards: Iterable[Card],
    now: datetime,
    daily_new_limit: int,
    daily_review_limit: int,
    reviews_done_today: int,
    learning_cap: int = LEARNING_QUEUE_CAP,
    sort_by_due: bool = False,
) -> ReviewQueue:
    """
    Select which cards a learner should see at `now`.

    Args:
        cards: The deck's cards, in the caller's preferred order.
        now: Point in time the queue is built for.
        daily_new_limit: Maximum new cards per day.
        daily_review_limit: Maximum scheduled reviews per day.
        reviews_done_today: Reviews already submitted today (from the review log).
        learning_cap: Ceiling on relearning cards, independent of daily limits.
        sort_by_due: Order each list by due time (stable) instead of input order.

    Returns:
        ReviewQueue with new, learning and due card ids.
    """
    new_cards: list[Card] = []
    learning_cards: list[Card] = []
    due_cards: list[Card] = []

    for card in cards:
        state = card.state
        if state.suspended or not state.is_due(now):
            continue

        if state.repetitions > 0:
            due_cards.append(card)
        elif state.last_reviewed_at is None:
            new_cards.append(card)
        else:
            learning_cards.append(card)

    if sort_by_due:
        for bucket in (new_cards, learning_cards, due_cards):
            bucket.sort(key=lambda c: c.state.due_at)

    new_cap = max(0, daily_new_limit)
    review_cap = remaining_review_budget(daily_review_limit, reviews_done_today)
    learning_cap = max(0, learning_cap)

    queue = ReviewQueue(
        new=[c.id for c in new_cards[:new_cap]],
        learning=[c.id for c in learning_cards[:learning_cap]],
        due=[c.id for c in due_cards[:review_cap]],
    )

    logger.debug(
        f"[queue] eligible new={len(new_cards)} learning={len(learning_cards)} "
        f"due={len(due_cards)}; selected new={len(queue.new)} "
        f"learning={len(queue.learning)} due={len(queue.due)} (review budget {review_cap})"
    )
    return queue


def select_queue_for_deck(
    cards: Iterable[Card],
    now: datetime,
    limits: DeckLimits,
    reviews_done_today: int,
    learning_cap: int = LEARNING_QUEUE_CAP,
    sort_by_due: bool = False,
) -> ReviewQueue:
    """Convenience wrapper taking the deck's configured limits."""
    return select_queue(
        cards,
        now,
        daily_new_limit=limits.daily_new_limit,
        daily_review_limit=limits.daily_review_limit,
        reviews_done_today=reviews_done_today,
        learning_cap=learning_cap,
        sort_by_due=sort_by_due,
    )
