"""
Read-only YAML deck snapshots.

A deck file is what the command line works on: deck limits, cards with
their memory state, and the review log. It is loaded, validated with
pydantic, and converted to domain objects. Nothing is ever written back.

    name: Spanish
    daily_new_limit: 20
    daily_review_limit: 200
    cards:
      - id: card_01J...
        front: perro
        back: dog
        media_urls: [img/dog.png]
        repetitions: 2
        interval: 6
        ease_factor: 2.5
        due_at: 2026-10-19T08:00:00+00:00
        last_reviewed_at: 2026-10-13T08:00:00+00:00
    reviews:
      - card_id: card_01J...
        rating: good
        reviewed_at: 2026-10-13T08:00:00+00:00
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml  # type: ignore
import yaml.constructor
from pydantic import BaseModel, Field, ValidationError, field_validator

from memodeck.domain.constants import DEFAULT_EASE_FACTOR, MIN_EASE_FACTOR
from memodeck.domain.models import Card, DeckLimits, MemoryState, Rating, ReviewLogEntry

logger = logging.getLogger(__name__)


class DeckFileError(Exception):
    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class UniqueKeyLoader(yaml.SafeLoader):
    """Custom YAML loader that forbids duplicate keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            seen.add(key)
        return super().construct_mapping(node, deep)


def as_utc(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CardEntry(BaseModel):
    id: str
    front: str = ""
    back: str | None = None
    media_urls: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, ge=MIN_EASE_FACTOR)
    interval: int = Field(default=0, ge=0)
    repetitions: int = Field(default=0, ge=0)
    lapse_count: int = Field(default=0, ge=0)
    suspended: bool = False
    due_at: datetime | None = None
    last_reviewed_at: datetime | None = None
    version: int = Field(default=0, ge=0)

    @field_validator("due_at", "last_reviewed_at", mode="after")
    @classmethod
    def _to_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    def to_card(self, now: datetime, deck_id: str | None) -> Card:
        state = MemoryState(
            # Cards without a due time were just created: due immediately
            due_at=self.due_at or now,
            ease_factor=self.ease_factor,
            interval=self.interval,
            repetitions=self.repetitions,
            lapse_count=self.lapse_count,
            suspended=self.suspended,
            last_reviewed_at=self.last_reviewed_at,
            version=self.version,
        )
        return Card(
            id=self.id,
            state=state,
            front=self.front,
            back=self.back,
            media_urls=list(self.media_urls),
            tags=list(self.tags),
            deck_id=deck_id,
        )


class ReviewEntryModel(BaseModel):
    card_id: str
    rating: Rating
    reviewed_at: datetime
    scheduled_interval: int = Field(default=0, ge=0)
    new_ease_factor: float = DEFAULT_EASE_FACTOR

    @field_validator("reviewed_at", mode="after")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class DeckFileModel(BaseModel):
    name: str = "Default"
    daily_new_limit: int | None = Field(default=None, ge=0)
    daily_review_limit: int | None = Field(default=None, ge=0)
    cards: list[CardEntry] = Field(default_factory=list)
    reviews: list[ReviewEntryModel] = Field(default_factory=list)


@dataclass
class DeckSnapshot:
    """A loaded deck, converted to domain objects."""

    name: str
    limits: DeckLimits
    cards: list[Card]
    reviews: list[ReviewLogEntry]


def parse_deck(
    raw: dict[str, Any], now: datetime, path: Path, defaults: DeckLimits
) -> DeckSnapshot:
    try:
        model = DeckFileModel.model_validate(raw)
    except ValidationError as e:
        raise DeckFileError(path, f"invalid deck: {e}") from e

    ids = [c.id for c in model.cards]
    duplicates = sorted({cid for cid in ids if ids.count(cid) > 1})
    if duplicates:
        raise DeckFileError(path, f"duplicate card ids: {', '.join(duplicates)}")

    limits = DeckLimits(
        daily_new_limit=(
            model.daily_new_limit
            if model.daily_new_limit is not None
            else defaults.daily_new_limit
        ),
        daily_review_limit=(
            model.daily_review_limit
            if model.daily_review_limit is not None
            else defaults.daily_review_limit
        ),
    )

    cards = [entry.to_card(now, deck_id=model.name) for entry in model.cards]
    reviews = [
        ReviewLogEntry(
            card_id=r.card_id,
            rating=r.rating,
            reviewed_at=r.reviewed_at,
            scheduled_interval=r.scheduled_interval,
            new_ease_factor=r.new_ease_factor,
            deck_id=model.name,
        )
        for r in model.reviews
    ]
    return DeckSnapshot(name=model.name, limits=limits, cards=cards, reviews=reviews)


def load_deck(
    path: Path, now: datetime, defaults: DeckLimits | None = None
) -> DeckSnapshot:
    """
    Load and validate a YAML deck file.

    Raises:
        DeckFileError: The file is missing, is not valid YAML, or fails validation.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DeckFileError(path, f"cannot read file ({e.strerror or e})") from e

    # Tabs are a common user error in hand-edited YAML
    if "\t" in text:
        text = text.replace("\t", "  ")

    try:
        raw = yaml.load(text, Loader=UniqueKeyLoader) or {}
    except yaml.YAMLError as e:
        raise DeckFileError(path, f"invalid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise DeckFileError(path, "top level must be a mapping")

    snapshot = parse_deck(raw, now, path, defaults or DeckLimits())
    logger.debug(
        f"[deck] Loaded {path.name}: {len(snapshot.cards)} card(s), "
        f"{len(snapshot.reviews)} review(s)"
    )
    return snapshot


def card_to_yaml(card: Card) -> str:
    """Render a card (content and state) as a YAML list item for a deck file."""
    state = card.state
    entry: dict[str, Any] = {
        "id": card.id,
        "front": card.front,
        "back": card.back,
        "media_urls": list(card.media_urls),
        "tags": list(card.tags),
        "ease_factor": state.ease_factor,
        "interval": state.interval,
        "repetitions": state.repetitions,
        "lapse_count": state.lapse_count,
        "suspended": state.suspended,
        "due_at": state.due_at.isoformat(),
        "last_reviewed_at": state.last_reviewed_at.isoformat() if state.last_reviewed_at else None,
        "version": state.version,
    }
    return yaml.dump(
        [entry],
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
