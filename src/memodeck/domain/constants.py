"""Centralized constants for memodeck.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
LAPSE_EASE_PENALTY = 0.8
HARD_INTERVAL_MULTIPLIER = 0.8
EASY_INTERVAL_MULTIPLIER = 1.3
FIRST_SUCCESS_INTERVAL = 1  # days
SECOND_SUCCESS_INTERVAL = 6  # days
LAPSE_INTERVAL = 1  # days
PASSING_QUALITY = 3

# ---------- Deck limits ----------
DEFAULT_DAILY_NEW_LIMIT = 20
DEFAULT_DAILY_REVIEW_LIMIT = 200

# ---------- Queue Selector ----------
LEARNING_QUEUE_CAP = 50

# ---------- Quiz ----------
DEFAULT_QUIZ_QUESTIONS = 10
QUIZ_MIN_CARDS = 4
QUIZ_DISTRACTORS = 3
# Mode weights; must sum to 1
QUIZ_WRITE_ANSWER_WEIGHT = 0.2
QUIZ_IMAGE_TO_TEXT_WEIGHT = 0.4
QUIZ_TEXT_TO_IMAGE_WEIGHT = 0.4
