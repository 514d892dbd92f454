"""Tests for daily review-queue selection."""

from datetime import timedelta

import pytest

from memodeck.application.queue_selector import (
    remaining_review_budget,
    select_queue,
    select_queue_for_deck,
)
from memodeck.domain.models import DeckLimits


def _select(cards, now, new=20, review=200, done=0, **kwargs):
    return select_queue(
        cards,
        now,
        daily_new_limit=new,
        daily_review_limit=review,
        reviews_done_today=done,
        **kwargs,
    )


def test_new_cards_capped_by_daily_limit(make_card, now):
    cards = [make_card("n1"), make_card("n2"), make_card("n3")]

    queue = _select(cards, now, new=2)

    assert queue.new == ["n1", "n2"]
    assert queue.learning == []
    assert queue.due == []


def test_fewer_cards_than_cap_returns_all(make_card, now):
    cards = [make_card("n1"), make_card("d1", repetitions=3, interval=5)]

    queue = _select(cards, now, new=10, review=10)

    assert queue.new == ["n1"]
    assert queue.due == ["d1"]


def test_partitions_cards(make_card, now):
    cards = [
        make_card("new"),
        make_card("learning", reviewed=True),
        make_card("due", repetitions=2, interval=6, due_in=timedelta(hours=-1)),
        make_card("later", repetitions=2, interval=6, due_in=timedelta(days=3)),
        make_card("relearn-later", reviewed=True, due_in=timedelta(hours=5)),
    ]

    queue = _select(cards, now)

    assert queue.new == ["new"]
    assert queue.learning == ["learning"]
    assert queue.due == ["due"]


def test_due_at_exactly_now_is_due(make_card, now):
    card = make_card("edge", repetitions=1, interval=1, due_in=timedelta(0))
    assert _select([card], now).due == ["edge"]


def test_lists_are_disjoint(make_card, now):
    cards = [make_card(f"c{i}", repetitions=i % 3, reviewed=i % 2 == 0) for i in range(30)]

    queue = _select(cards, now)

    ids = queue.new + queue.learning + queue.due
    assert len(ids) == len(set(ids))


def test_suspended_cards_never_selected(make_card, now):
    cards = [
        make_card("new-s", suspended=True),
        make_card("learning-s", reviewed=True, suspended=True),
        make_card("due-s", repetitions=4, interval=20, suspended=True),
        make_card("ok"),
    ]

    queue = _select(cards, now)

    assert queue.session_order() == ["ok"]


def test_new_card_rescheduled_into_future_is_skipped(make_card, now):
    card = make_card("future", due_in=timedelta(days=2))
    assert _select([card], now).new == []


class TestReviewBudget:
    def test_due_capped_by_remaining_budget(self, make_card, now):
        cards = [make_card(f"d{i}", repetitions=2, interval=6) for i in range(10)]

        queue = _select(cards, now, review=5, done=3)

        assert queue.due == ["d0", "d1"]

    def test_budget_exhausted_gives_empty_due(self, make_card, now):
        cards = [make_card(f"d{i}", repetitions=2, interval=6) for i in range(3)]

        assert _select(cards, now, review=5, done=5).due == []
        assert _select(cards, now, review=5, done=9).due == []

    def test_remaining_review_budget(self):
        assert remaining_review_budget(200, 0) == 200
        assert remaining_review_budget(200, 150) == 50
        assert remaining_review_budget(200, 250) == 0

    @pytest.mark.parametrize("new_limit,review_limit,done", [(0, 0, 0), (1, 3, 2), (5, 5, 0)])
    def test_caps_are_never_exceeded(self, make_card, now, new_limit, review_limit, done):
        cards = [make_card(f"n{i}") for i in range(8)]
        cards += [make_card(f"d{i}", repetitions=3, interval=9) for i in range(8)]

        queue = _select(cards, now, new=new_limit, review=review_limit, done=done)

        assert len(queue.new) <= new_limit
        assert len(queue.due) <= max(0, review_limit - done)

    def test_negative_limits_clamp_to_zero(self, make_card, now):
        cards = [make_card("n1"), make_card("d1", repetitions=2, interval=6)]

        queue = _select(cards, now, new=-3, review=-1)

        assert queue.new == []
        assert queue.due == []


class TestLearning:
    def test_learning_ignores_daily_limits(self, make_card, now):
        cards = [make_card("l1", reviewed=True), make_card("l2", reviewed=True)]

        queue = _select(cards, now, new=0, review=0, done=50)

        assert queue.learning == ["l1", "l2"]

    def test_learning_has_fixed_ceiling(self, make_card, now):
        cards = [make_card(f"l{i}", reviewed=True) for i in range(60)]

        queue = _select(cards, now)

        assert len(queue.learning) == 50
        assert queue.learning[0] == "l0"

    def test_learning_cap_is_configurable(self, make_card, now):
        cards = [make_card(f"l{i}", reviewed=True) for i in range(5)]
        assert len(_select(cards, now, learning_cap=2).learning) == 2


def test_input_order_is_kept_by_default(make_card, now):
    cards = [
        make_card("late", repetitions=2, interval=6, due_in=timedelta(hours=-1)),
        make_card("early", repetitions=2, interval=6, due_in=timedelta(days=-4)),
    ]

    assert _select(cards, now).due == ["late", "early"]
    assert _select(cards, now, sort_by_due=True).due == ["early", "late"]


def test_session_order_is_new_learning_due(make_card, now):
    cards = [
        make_card("due", repetitions=2, interval=6),
        make_card("learning", reviewed=True),
        make_card("new"),
    ]

    queue = _select(cards, now)

    assert queue.session_order() == ["new", "learning", "due"]
    assert queue.total == 3


def test_select_queue_for_deck_uses_limits(make_card, now):
    cards = [make_card(f"n{i}") for i in range(5)]

    queue = select_queue_for_deck(cards, now, DeckLimits(daily_new_limit=3), reviews_done_today=0)

    assert queue.new == ["n0", "n1", "n2"]
