"""Picking the hidden answer of a puzzle: one piece on the board + one of its legal moves."""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board
from src.chess.generator import generate_board
from src.chess.moves import Move, legal_moves
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.config import PuzzleSettings
from src.core.exceptions import GenerationExhaustedError, NoLegalMoveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """The hidden answer. Does not change during the lifetime of a puzzle."""

    piece_type: PieceType
    color: Color
    origin: Square
    destination: Square

    @classmethod
    def from_piece(cls, piece: Piece, destination: Square) -> Self:
        return cls(piece.type, piece.color, piece.square, destination)

    @property
    def move(self) -> Move:
        return Move(self.origin, self.destination)


def select_target(board: Board, rng: Optional[random.Random] = None) -> Target:
    """
    Pick a random piece and a random legal move for it.

    Raises:
        NoLegalMoveError: the piece that got picked cannot move. The caller should generate a new board.
    """
    rng = rng or random.Random()
    pieces = board.pieces
    if not pieces:
        raise NoLegalMoveError("Cannot select a target on an empty board.")

    piece = rng.choice(pieces)
    destinations = legal_moves(piece, board)
    if not destinations:
        raise NoLegalMoveError(
            f"{piece.color.name.lower()} {piece.type.name.lower()} on {piece.square.to_algebraic()} has no legal move."
        )
    return Target.from_piece(piece, rng.choice(destinations))


def new_puzzle(
    rng: Optional[random.Random] = None, settings: Optional[PuzzleSettings] = None
) -> tuple[Board, Target]:
    """
    Board + hidden target to start a puzzle with.

    When the selected piece turns out to be stuck, the whole board is regenerated (not just the piece).

    Raises:
        GenerationExhaustedError: still no puzzle after `settings.board_attempts` boards.
    """
    rng = rng or random.Random()
    settings = settings or PuzzleSettings()

    for attempt in range(1, settings.board_attempts + 1):
        board = generate_board(rng, settings)
        try:
            target = select_target(board, rng)
        except NoLegalMoveError as e:
            logger.debug("Attempt %d: %s Regenerating the board.", attempt, e)
            continue
        return board, target

    raise GenerationExhaustedError(
        f"Could not find a puzzle with a movable target piece in {settings.board_attempts} attempts."
    )
