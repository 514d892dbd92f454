"""Daily review counters reconstructed from a review history."""

from collections.abc import Iterable
from datetime import datetime

from memodeck.domain.models import ReviewLogEntry


def start_of_day(now: datetime) -> datetime:
    """Midnight of `now`'s calendar day, in `now`'s own timezone."""
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def reviews_done_today(
    entries: Iterable[ReviewLogEntry],
    now: datetime,
    deck_id: str | None = None,
) -> int:
    """
    Count reviews submitted between the start of today and `now`.

    When `deck_id` is given, only entries for that deck are counted.
    """
    day_start = start_of_day(now)
    return sum(
        1
        for entry in entries
        if day_start <= entry.reviewed_at <= now
        and (deck_id is None or entry.deck_id == deck_id)
    )
