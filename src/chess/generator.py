"""
Random board generation
-----

1. Place the two kings.
2. Scatter a handful of random pieces around them, never giving check.
3. Throw the whole board away if the kings ended up next to each other.

Every loop is bounded: giving up on a single piece just leaves it off the board, giving up on the whole board
raises GenerationExhaustedError.
"""

import logging
import random
from typing import Optional

from src.chess.attacks import attacks
from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.config import PuzzleSettings
from src.core.exceptions import GenerationExhaustedError

logger = logging.getLogger(__name__)

# The king is never one of the extra pieces: exactly one per color is placed up front.
EXTRA_PIECE_TYPES: list[PieceType] = [
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
]

# A pawn never stands on either back rank (its own starting rank or the promotion rank)
PAWN_FORBIDDEN_ROWS = (0, BOARD_DIMENSIONS[0] - 1)


def random_square(rng: random.Random) -> Square:
    return Square(rng.randrange(BOARD_DIMENSIONS[0]), rng.randrange(BOARD_DIMENSIONS[1]))


def is_valid_placement(piece: Piece, board: Board) -> bool:
    """
    Can this piece be added to the board?

    * the square must be free
    * a pawn can not stand on the first or last rank
    * it must not attack the opposing king (no position starts with a check)
    """
    if board.is_occupied(piece.square):
        return False
    if piece.type == PieceType.PAWN and piece.square.row in PAWN_FORBIDDEN_ROWS:
        return False
    return not attacks(piece, board.with_piece(piece))


def place_piece(
    board: Board,
    piece_type: PieceType,
    color: Color,
    rng: random.Random,
    attempts: int,
) -> Optional[Board]:
    """Try random squares for the piece. Returns the new board, or None if no valid square was found in time."""
    for _ in range(attempts):
        candidate = Piece(piece_type, color, random_square(rng))
        if is_valid_placement(candidate, board):
            return board.with_piece(candidate)
    return None


def kings_adjacent(board: Board) -> bool:
    white_king = board.king(Color.WHITE)
    black_king = board.king(Color.BLACK)
    if white_king is None or black_king is None:
        return False
    return white_king.square.is_adjacent(black_king.square)


def _build_board(rng: random.Random, settings: PuzzleSettings) -> Optional[Board]:
    """One attempt at a full board. None when the kings could not be placed."""
    board = Board()
    for color in (Color.WHITE, Color.BLACK):
        with_king = place_piece(
            board, PieceType.KING, color, rng, settings.placement_attempts
        )
        if with_king is None:
            return None
        board = with_king

    for _ in range(settings.extra_pieces):
        piece_type = rng.choice(EXTRA_PIECE_TYPES)
        color = rng.choice([Color.WHITE, Color.BLACK])
        with_piece = place_piece(board, piece_type, color, rng, settings.placement_attempts)
        if with_piece is None:
            # partial boards are fine: just leave this one out
            logger.debug("No square found for %s %s, skipping it", color.name, piece_type.name)
            continue
        board = with_piece
    return board


def generate_board(
    rng: Optional[random.Random] = None, settings: Optional[PuzzleSettings] = None
) -> Board:
    """
    Random board with one king per color and up to `settings.extra_pieces` other pieces.

    Raises:
        GenerationExhaustedError: no acceptable board within `settings.board_attempts` tries.
    """
    rng = rng or random.Random()
    settings = settings or PuzzleSettings()

    for attempt in range(1, settings.board_attempts + 1):
        board = _build_board(rng, settings)
        if board is None:
            continue
        if kings_adjacent(board):
            logger.debug("Attempt %d: kings ended up adjacent, restarting", attempt)
            continue
        return board

    raise GenerationExhaustedError(
        f"Could not generate a valid board in {settings.board_attempts} attempts."
    )
