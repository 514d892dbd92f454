"""
Quiz generation over picture cards.

Builds randomized multiple-choice and free-text questions from cards that
are not suspended and carry at least one media attachment.
"""

import logging
import random
from collections.abc import Iterable

from memodeck.domain.constants import (
    DEFAULT_QUIZ_QUESTIONS,
    QUIZ_DISTRACTORS,
    QUIZ_IMAGE_TO_TEXT_WEIGHT,
    QUIZ_MIN_CARDS,
    QUIZ_WRITE_ANSWER_WEIGHT,
)
from memodeck.domain.models import Card, QuizMode, QuizOption, QuizQuestion

logger = logging.getLogger(__name__)


class QuizUnavailableError(ValueError):
    pass


def is_quiz_eligible(card: Card) -> bool:
    return not card.suspended and bool(card.media_urls)


def pick_mode(rng: random.Random) -> QuizMode:
    """Weighted draw: 20% write-answer, 40% image-to-text, 40% text-to-image."""
    roll = rng.random()
    if roll < QUIZ_WRITE_ANSWER_WEIGHT:
        return QuizMode.WRITE_ANSWER
    if roll < QUIZ_WRITE_ANSWER_WEIGHT + QUIZ_IMAGE_TO_TEXT_WEIGHT:
        return QuizMode.IMAGE_TO_TEXT
    return QuizMode.TEXT_TO_IMAGE


def _build_options(
    correct: Card, distractors: list[Card], mode: QuizMode, rng: random.Random
) -> list[QuizOption]:
    choices = [*distractors, correct]
    rng.shuffle(choices)
    return [
        QuizOption(
            id=card.id,
            text=card.back or "",
            # Image-to-text shows every option as a picture; text-to-image shows names only
            image_url=card.media_urls[0] if mode is QuizMode.IMAGE_TO_TEXT else None,
        )
        for card in choices
    ]


def generate_quiz(
    cards: Iterable[Card],
    count: int = DEFAULT_QUIZ_QUESTIONS,
    mode: QuizMode | None = None,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """
    Generate up to `count` quiz questions, each around a distinct card.

    Args:
        cards: Candidate cards; ineligible ones are skipped.
        count: Number of questions wanted.
        mode: Force every question into one mode instead of the weighted draw.
        rng: Random source, for reproducible quizzes.

    Raises:
        QuizUnavailableError: Fewer than four eligible cards.
    """
    rng = rng or random.Random()
    pool = [card for card in cards if is_quiz_eligible(card)]

    if len(pool) < QUIZ_MIN_CARDS:
        raise QuizUnavailableError(
            f"Need at least {QUIZ_MIN_CARDS} cards with images to generate quiz "
            f"(found {len(pool)})"
        )

    picks = rng.sample(pool, k=min(max(0, count), len(pool)))
    questions: list[QuizQuestion] = []

    for i, correct in enumerate(picks):
        question_mode = mode or pick_mode(rng)
        others = [card for card in pool if card.id != correct.id]
        distractors = rng.sample(others, k=min(QUIZ_DISTRACTORS, len(others)))

        options = None
        if question_mode is not QuizMode.WRITE_ANSWER:
            options = _build_options(correct, distractors, question_mode, rng)

        questions.append(
            QuizQuestion(
                id=f"q-{i}",
                mode=question_mode,
                card_id=correct.id,
                front=correct.front,
                back=correct.back or "",
                image_url=correct.media_urls[0],
                options=options,
            )
        )

    logger.debug(f"[quiz] built {len(questions)} question(s) from {len(pool)} eligible card(s)")
    return questions
