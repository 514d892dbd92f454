from datetime import timedelta

from memodeck.domain.models import RATING_QUALITY, MemoryState, Rating, ReviewQueue


def test_rating_quality_table_is_total():
    assert set(RATING_QUALITY) == set(Rating)
    assert [r.quality for r in Rating] == [0, 3, 4, 5]


def test_only_again_is_a_lapse():
    assert [r for r in Rating if r.is_lapse] == [Rating.AGAIN]


def test_rating_from_literal():
    assert Rating("easy") is Rating.EASY


def test_initial_state_defaults(now):
    state = MemoryState.initial(now)

    assert state.ease_factor == 2.5
    assert state.interval == 0
    assert state.repetitions == 0
    assert state.lapse_count == 0
    assert state.suspended is False
    assert state.due_at == now
    assert state.last_reviewed_at is None
    assert state.version == 0
    assert state.is_new
    assert not state.is_learning


def test_learning_state(now):
    state = MemoryState(due_at=now, last_reviewed_at=now - timedelta(hours=1), interval=1)
    assert state.is_learning
    assert not state.is_new


def test_is_due(now):
    state = MemoryState(due_at=now)
    assert state.is_due(now)
    assert not state.is_due(now - timedelta(seconds=1))


def test_review_queue_session_order():
    queue = ReviewQueue(new=["n"], learning=["l1", "l2"], due=["d"])
    assert queue.session_order() == ["n", "l1", "l2", "d"]
    assert queue.total == 4
