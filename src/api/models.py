"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.square import Square
from src.core.exceptions import InvalidRequestError, MalformedNotationError
from src.core.shared_types import Color, FeedbackCategory, PieceType, Status


def _validate_algebraic(value: str) -> str:
    """Squares travel as algebraic notation ('e4'). Normalise to lower case and make sure it is on the board."""
    normalised = value.strip().lower()
    try:
        Square.from_algebraic(normalised)
    except MalformedNotationError as e:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        ) from e
    return normalised


# --- REQUEST MODELS ---
class CreatePuzzleRequest(BaseModel):
    # fixed seed gives a reproducible puzzle (handy for a daily puzzle, or for testing)
    seed: Optional[int] = None


class GetPuzzleRequest(BaseModel):
    puzzle_id: UUID


class DeletePuzzleRequest(BaseModel):
    puzzle_id: UUID


class TimeoutRequest(BaseModel):
    puzzle_id: UUID


class LegalMovesRequest(BaseModel):
    puzzle_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_algebraic(value)


class GuessRequest(BaseModel):
    puzzle_id: UUID
    piece_type: PieceType
    color: Color
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_algebraic(value)


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    piece_type: PieceType
    color: Color
    square: str


class TargetResponse(BaseModel):
    piece_type: PieceType
    color: Color
    from_square: str
    to_square: str


class TurnResponse(BaseModel):
    piece_type: Optional[PieceType]
    color: Optional[Color]
    move: Optional[str]
    feedback: str
    timed_out: bool


class PuzzleResponse(BaseModel):
    puzzle_id: UUID
    board_fen: str
    pieces: list[PieceResponse]
    status: Status
    guesses_left: int
    time_remaining: float
    turns: list[TurnResponse]
    # only filled in once the puzzle is over
    target: Optional[TargetResponse] = None


class GuessResponse(BaseModel):
    puzzle_id: UUID
    valid: bool
    exact_match: bool
    wrong_kind: bool
    wrong_color: bool
    wrong_origin: bool
    wrong_destination: bool
    headline: FeedbackCategory
    message: str
    guesses_left: int
    status: Status


class LegalMovesResponse(BaseModel):
    puzzle_id: UUID
    square: str
    legal_moves: list[str]
