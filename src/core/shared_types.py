"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


# --- NOTE The domain layer has its own Color and PieceType (see src/chess/pieces.py). These are the string versions
# --- used by the API / DB layers. Same names on purpose, the imports show which version is used where.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class FeedbackCategory(StrEnum):
    """Headline of the feedback on a guess. Ordered from most to least specific mismatch."""

    SOLVED = "solved"
    WRONG_KIND = "wrong kind"
    WRONG_COLOR = "wrong color"
    WRONG_ORIGIN = "wrong origin"
    WRONG_DESTINATION = "wrong destination"
    INVALID = "invalid"
