"""
Custom exceptions shared by all layers.

Every error raised on purpose derives from GameError, so the service (and whatever sits on top of it)
can catch the whole family in one place.
"""


class GameError(Exception):
    """Base class for all expected errors of the puzzle game."""


class MalformedNotationError(GameError):
    """Text could not be read as a square in algebraic notation (ex. 'z9', 'e', 'e10')"""


class InvalidBoardError(GameError):
    """Board violates its invariants: two pieces on one square, or more than one king of a color."""


class GenerationExhaustedError(GameError):
    """Random board / target generation did not succeed within its retry budget."""


class NoLegalMoveError(GameError):
    """The piece picked as target has no legal move. Caller is expected to regenerate the board."""


class GameStateError(GameError):
    """Action not allowed in the current state of the puzzle session (ex. guessing after it was solved)."""


class InvalidRequestError(GameError):
    """Request coming in from the outside could not be validated."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record."""
