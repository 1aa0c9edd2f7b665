"""
Comparing a guess against the hidden target.

Feedback is a progressive hint: only the most specific mismatch becomes the headline
(kind > color > origin > destination), whether the destination is right is always told on the side.
"""

from dataclasses import dataclass
from typing import Self

from src.chess.board import Board
from src.chess.moves import Move, is_legal_move
from src.chess.pieces import Color, PieceType
from src.chess.puzzle import Target
from src.chess.square import Square
from src.core.shared_types import FeedbackCategory


@dataclass(frozen=True)
class Guess:
    piece_type: PieceType
    color: Color
    origin: Square
    destination: Square

    @property
    def move(self) -> Move:
        return Move(self.origin, self.destination)


HEADLINE_MESSAGES: dict[FeedbackCategory, str] = {
    FeedbackCategory.SOLVED: "Correct piece and move! You got it!",
    FeedbackCategory.WRONG_KIND: "Wrong piece type.",
    FeedbackCategory.WRONG_COLOR: "Right piece type, wrong color.",
    FeedbackCategory.WRONG_ORIGIN: "Right piece, but a different one of them moves.",
    FeedbackCategory.WRONG_DESTINATION: "Right piece, wrong destination.",
    FeedbackCategory.INVALID: "That is not a legal move on this board. Try again.",
}


@dataclass(frozen=True)
class Feedback:
    valid: bool
    exact_match: bool
    wrong_kind: bool
    wrong_color: bool
    wrong_origin: bool
    wrong_destination: bool

    @classmethod
    def invalid(cls) -> Self:
        """Guess was rejected before comparing it to the target: does not count as a turn."""
        return cls(
            valid=False,
            exact_match=False,
            wrong_kind=False,
            wrong_color=False,
            wrong_origin=False,
            wrong_destination=False,
        )

    @property
    def headline(self) -> FeedbackCategory:
        if not self.valid:
            return FeedbackCategory.INVALID
        if self.exact_match:
            return FeedbackCategory.SOLVED
        if self.wrong_kind:
            return FeedbackCategory.WRONG_KIND
        if self.wrong_color:
            return FeedbackCategory.WRONG_COLOR
        if self.wrong_origin:
            return FeedbackCategory.WRONG_ORIGIN
        return FeedbackCategory.WRONG_DESTINATION

    @property
    def destination_correct(self) -> bool:
        return self.valid and not self.wrong_destination

    @property
    def message(self) -> str:
        headline = HEADLINE_MESSAGES[self.headline]
        if self.headline in (
            FeedbackCategory.SOLVED,
            FeedbackCategory.INVALID,
            FeedbackCategory.WRONG_DESTINATION,
        ):
            return headline
        side_note = (
            "The destination square is correct."
            if self.destination_correct
            else "The destination square is wrong too."
        )
        return f"{headline} {side_note}"


def evaluate(guess: Guess, target: Target) -> Feedback:
    """Field by field comparison. Neither the guess nor the target is changed."""
    wrong_kind = guess.piece_type != target.piece_type
    wrong_color = guess.color != target.color
    wrong_origin = guess.origin != target.origin
    wrong_destination = guess.destination != target.destination
    return Feedback(
        valid=True,
        exact_match=not (wrong_kind or wrong_color or wrong_origin or wrong_destination),
        wrong_kind=wrong_kind,
        wrong_color=wrong_color,
        wrong_origin=wrong_origin,
        wrong_destination=wrong_destination,
    )


def is_valid_guess(guess: Guess, board: Board) -> bool:
    """The guessed piece must stand on the origin square, and the destination must be one of its legal moves."""
    piece = board.piece(guess.origin)
    if piece is None:
        return False
    if piece.type != guess.piece_type or piece.color != guess.color:
        return False
    return is_legal_move(piece, guess.destination, board)


def check_guess(guess: Guess, board: Board, target: Target) -> Feedback:
    """Validate first, only then compare against the target."""
    if not is_valid_guess(guess, board):
        return Feedback.invalid()
    return evaluate(guess, target)
