"""
Domain models for scheduling and queue selection.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .constants import DEFAULT_DAILY_NEW_LIMIT, DEFAULT_DAILY_REVIEW_LIMIT, DEFAULT_EASE_FACTOR


class Rating(str, Enum):
    """A learner's self-assessment of recall for the card just reviewed."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @property
    def quality(self) -> int:
        """SM-2 quality score (0-5 scale)."""
        return RATING_QUALITY[self]

    @property
    def is_lapse(self) -> bool:
        return self is Rating.AGAIN


# Total over the four ratings; the legacy 0-5 scale has no 1 or 2.
RATING_QUALITY: dict[Rating, int] = {
    Rating.AGAIN: 0,
    Rating.HARD: 3,
    Rating.GOOD: 4,
    Rating.EASY: 5,
}


@dataclass(frozen=True)
class MemoryState:
    """
    Per-card scheduling state.

    Attributes:
        ease_factor: Interval growth multiplier, never below 1.3.
        interval: Days until the card is due again (0 only for new cards).
        repetitions: Consecutive successful recalls since the last lapse.
        due_at: Moment at or after which the card is due.
        lapse_count: Cumulative number of `again` ratings.
        suspended: Suspended cards never enter a queue.
        last_reviewed_at: Time of the most recent rating, None if never reviewed.
        version: Incremented on every transition; lets callers detect lost updates.
    """

    due_at: datetime
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0
    lapse_count: int = 0
    suspended: bool = False
    last_reviewed_at: datetime | None = None
    version: int = 0

    @classmethod
    def initial(cls, now: datetime) -> "MemoryState":
        """State for a freshly created (or reset) card: due immediately."""
        return cls(due_at=now)

    @property
    def is_new(self) -> bool:
        return self.repetitions == 0 and self.last_reviewed_at is None

    @property
    def is_learning(self) -> bool:
        return self.repetitions == 0 and self.last_reviewed_at is not None

    def is_due(self, now: datetime) -> bool:
        return self.due_at <= now


@dataclass
class Card:
    """
    A flashcard as seen by the engine: an id, its memory state, and the
    content fields the quiz builder needs.
    """

    id: str
    state: MemoryState
    front: str = ""
    back: str | None = None
    media_urls: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    deck_id: str | None = None

    @property
    def suspended(self) -> bool:
        return self.state.suspended


@dataclass(frozen=True)
class DeckLimits:
    """Per-deck daily caps, configured by the deck owner."""

    daily_new_limit: int = DEFAULT_DAILY_NEW_LIMIT
    daily_review_limit: int = DEFAULT_DAILY_REVIEW_LIMIT


@dataclass
class ReviewQueue:
    """Result of queue selection: three disjoint, ordered lists of card ids."""

    new: list[str] = field(default_factory=list)
    learning: list[str] = field(default_factory=list)
    due: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.new) + len(self.learning) + len(self.due)

    def session_order(self) -> list[str]:
        """Linear study session: new first, then learning, then due."""
        return [*self.new, *self.learning, *self.due]


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    A single submitted rating.

    Attributes:
        card_id: The card that was reviewed.
        rating: The rating the learner gave.
        reviewed_at: When the rating was submitted.
        scheduled_interval: Interval assigned by this review (days).
        new_ease_factor: Ease factor after this review.
        deck_id: Owning deck, if known.
    """

    card_id: str
    rating: Rating
    reviewed_at: datetime
    scheduled_interval: int
    new_ease_factor: float
    deck_id: str | None = None


@dataclass
class DeckStats:
    total: int = 0
    new: int = 0
    learning: int = 0
    review: int = 0
    suspended: int = 0


class QuizMode(str, Enum):
    WRITE_ANSWER = "write-answer"
    IMAGE_TO_TEXT = "image-to-text"
    TEXT_TO_IMAGE = "text-to-image"


@dataclass(frozen=True)
class QuizOption:
    id: str
    text: str
    image_url: str | None = None


@dataclass
class QuizQuestion:
    """
    One quiz question built around a correct card.

    Write-answer questions carry no options; the learner types the back.
    """

    id: str
    mode: QuizMode
    card_id: str
    front: str
    back: str
    image_url: str
    options: list[QuizOption] | None = None
