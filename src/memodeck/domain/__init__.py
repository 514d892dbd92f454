# Domain Package
from .models import (
    Card,
    DeckLimits,
    DeckStats,
    MemoryState,
    QuizMode,
    QuizOption,
    QuizQuestion,
    Rating,
    ReviewLogEntry,
    ReviewQueue,
)

__all__ = [
    "Card",
    "DeckLimits",
    "DeckStats",
    "MemoryState",
    "QuizMode",
    "QuizOption",
    "QuizQuestion",
    "Rating",
    "ReviewLogEntry",
    "ReviewQueue",
]
