"""memodeck: SM-2 scheduling and daily review queues for flashcard decks."""

from memodeck.consts import VERSION

__version__ = VERSION
