"""Session state value object for the study session state machine."""

from enum import StrEnum


class SessionState(StrEnum):
    """Study session states.

    State machine:
        EMPTY <-> SHOWING(card, flipped)

    States:
        EMPTY: No card available (empty store or empty filtered set)
        SHOWING: A card is on screen, front or back side up
    """

    EMPTY = "empty"
    SHOWING = "showing"

    def can_flip(self) -> bool:
        """Check if the current card can be flipped."""
        return self is SessionState.SHOWING
