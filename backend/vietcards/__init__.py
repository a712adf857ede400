"""Vietnamese flashcards - weighted-random study sessions with tag filters."""

__version__ = "0.1.0"
