"""
SM-2 scheduler for four-button ratings.

Maps again/hard/good/easy onto the SM-2 quality scale (0, 3, 4, 5) and
computes the next memory state. This is a pure computation module with no
I/O; the only impurity is the wall-clock read when `now` is omitted.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from memodeck.domain.constants import (
    EASY_INTERVAL_MULTIPLIER,
    FIRST_SUCCESS_INTERVAL,
    HARD_INTERVAL_MULTIPLIER,
    LAPSE_EASE_PENALTY,
    LAPSE_INTERVAL,
    MIN_EASE_FACTOR,
    PASSING_QUALITY,
    SECOND_SUCCESS_INTERVAL,
)
from memodeck.domain.models import MemoryState, Rating

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _round_half_up(value: float) -> int:
    # Growth products are never negative, so floor(x + 0.5) rounds half away from zero.
    return int(math.floor(value + 0.5))


def _clamp_ease(ease_factor: float) -> float:
    return max(MIN_EASE_FACTOR, ease_factor)


def ease_delta(quality: int) -> float:
    """
    Standard SM-2 ease adjustment.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    miss = 5 - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


def next_interval(state: MemoryState, rating: Rating | str) -> int:
    """Interval in days that `rating` would assign to `state`."""
    rating = Rating(rating)
    if rating.quality < PASSING_QUALITY:
        return LAPSE_INTERVAL

    if state.repetitions == 0:
        return FIRST_SUCCESS_INTERVAL
    if state.repetitions == 1:
        return SECOND_SUCCESS_INTERVAL

    multiplier = state.ease_factor
    if rating is Rating.HARD:
        multiplier *= HARD_INTERVAL_MULTIPLIER
    elif rating is Rating.EASY:
        multiplier *= EASY_INTERVAL_MULTIPLIER

    return max(1, _round_half_up(state.interval * multiplier))


def transition(
    state: MemoryState, rating: Rating | str, now: datetime | None = None
) -> MemoryState:
    """
    Compute the memory state that follows a rating.

    Args:
        state: Current memory state of the card.
        rating: The learner's rating, as a Rating or one of its literal values.
        now: Review time; defaults to the current UTC time.

    Returns:
        A new MemoryState. `due_at` is `now` plus whole days (time of day is
        kept), `last_reviewed_at` is `now`, and `version` is bumped.
    """
    rating = Rating(rating)
    now = now or utcnow()
    interval = next_interval(state, rating)

    if rating.is_lapse:
        repetitions = 0
        ease_factor = _clamp_ease(state.ease_factor - LAPSE_EASE_PENALTY)
        lapse_count = state.lapse_count + 1
    else:
        repetitions = state.repetitions + 1
        ease_factor = _clamp_ease(state.ease_factor + ease_delta(rating.quality))
        lapse_count = state.lapse_count

    logger.debug(
        f"[sched] {rating.value}: reps {state.repetitions}->{repetitions} "
        f"interval {state.interval}->{interval} ease {state.ease_factor:.2f}->{ease_factor:.2f}"
    )

    return replace(
        state,
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        lapse_count=lapse_count,
        due_at=now + timedelta(days=interval),
        last_reviewed_at=now,
        version=state.version + 1,
    )


def preview_intervals(state: MemoryState) -> dict[Rating, int]:
    """
    Interval each rating would produce, for labelling the answer buttons.
    """
    return {rating: next_interval(state, rating) for rating in Rating}
