from datetime import datetime, timedelta, timezone

import pytest

from memodeck.domain.models import Card, MemoryState

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_card(now):
    """Factory for cards in a given scheduling situation relative to `now`."""

    def _make(
        card_id: str,
        repetitions: int = 0,
        interval: int = 0,
        ease_factor: float = 2.5,
        due_in: timedelta = timedelta(0),
        reviewed: bool = False,
        suspended: bool = False,
        media_urls: list[str] | None = None,
        back: str | None = None,
    ) -> Card:
        state = MemoryState(
            due_at=now + due_in,
            ease_factor=ease_factor,
            interval=interval,
            repetitions=repetitions,
            suspended=suspended,
            last_reviewed_at=now - timedelta(days=1) if reviewed or repetitions else None,
        )
        return Card(
            id=card_id,
            state=state,
            front=f"front {card_id}",
            back=back if back is not None else f"back {card_id}",
            media_urls=media_urls or [],
        )

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/logs
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "MEMODECK_DAILY_NEW_LIMIT",
        "MEMODECK_DAILY_REVIEW_LIMIT",
        "MEMODECK_SORT_BY_DUE",
        "MEMODECK_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home


SAMPLE_DECK = """\
name: Spanish
daily_new_limit: 2
daily_review_limit: 3
cards:
  - id: n1
    front: perro
    back: dog
    media_urls: [img/perro.png]
  - id: n2
    front: gato
    back: cat
    media_urls: [img/gato.png]
  - id: n3
    front: pájaro
    back: bird
    media_urls: [img/pajaro.png]
  - id: l1
    front: casa
    back: house
    media_urls: [img/casa.png]
    repetitions: 0
    interval: 1
    ease_factor: 1.7
    lapse_count: 1
    due_at: 2026-10-19T09:00:00+00:00
    last_reviewed_at: 2026-10-18T09:00:00+00:00
  - id: d1
    front: agua
    back: water
    repetitions: 5
    interval: 10
    ease_factor: 2.5
    due_at: 2026-10-19T08:00:00+00:00
    last_reviewed_at: 2026-10-09T08:00:00+00:00
    version: 5
  - id: d2
    front: sol
    back: sun
    repetitions: 2
    interval: 6
    due_at: 2026-10-18T10:00:00Z
    last_reviewed_at: 2026-10-12T10:00:00Z
  - id: d3
    front: luna
    back: moon
    repetitions: 3
    interval: 15
    due_at: 2026-10-17T10:00:00
    last_reviewed_at: 2026-10-02T10:00:00
  - id: s1
    front: mar
    back: sea
    media_urls: [img/mar.png]
    repetitions: 2
    interval: 6
    suspended: true
    due_at: 2026-10-10T10:00:00+00:00
    last_reviewed_at: 2026-10-04T10:00:00+00:00
  - id: f1
    front: libro
    back: book
    repetitions: 2
    interval: 6
    due_at: 2026-10-25T10:00:00+00:00
    last_reviewed_at: 2026-10-19T10:00:00+00:00
reviews:
  - card_id: f1
    rating: good
    reviewed_at: 2026-10-19T10:00:00+00:00
    scheduled_interval: 6
    new_ease_factor: 2.5
  - card_id: l1
    rating: again
    reviewed_at: 2026-10-18T09:00:00+00:00
    scheduled_interval: 1
    new_ease_factor: 1.7
"""


@pytest.fixture
def deck_path(tmp_path):
    path = tmp_path / "spanish.yaml"
    path.write_text(SAMPLE_DECK, encoding="utf-8")
    return path
