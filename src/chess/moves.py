"""
Geometry/Base movement rules + the legality filter on top of them

Key idea: Use strategy pattern to define candidate move sets for each piece type.
A candidate is legal when making it does not leave your own king under attack.

Simplified rule set: no castling, no en passant, no double pawn step, no promotion.
"""

from dataclasses import dataclass
from typing import Callable, Self

from src.chess.attacks import (
    DIAGONALS,
    KING_DELTAS,
    KNIGHT_DELTAS,
    STRAIGHTS,
    Vector,
    attacks,
    pawn_capture_deltas,
)
from src.chess.board import Board
from src.chess.pieces import Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import MalformedNotationError


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface notation: <from_square><to_square>

        ex. "g1f3": move the piece that was on g1 to f3
        """
        if len(uci) != 4:
            raise MalformedNotationError(f"Cannot interpret {uci!r} as a move.")
        return cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# --- MOVEMENT RULES ---
def raycasting_move(piece: Piece, board: Board, directions: list[Vector]) -> list[Square]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    squares: list[Square] = []
    for d_row, d_col in directions:
        target_square = piece.square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            blocker = board.piece(target_square)
            if blocker is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if blocker.is_opponent_of(piece):
                    squares.append(target_square)
                break
            squares.append(target_square)
            target_square = target_square.offset(d_row, d_col)
    return squares


def single_step_move(piece: Piece, board: Board, deltas: list[Vector]) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    squares: list[Square] = []
    for d_row, d_col in deltas:
        target_square = piece.square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        occupant = board.piece(target_square)
        if occupant is None or occupant.is_opponent_of(piece):
            squares.append(target_square)
    return squares


def candidate_pawn_moves(piece: Piece, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward, only onto an empty square.
    - takes diagonally (forward), only onto an opponent's piece
    """
    squares: list[Square] = []
    push = piece.square.offset(piece.color.forward, 0)
    if push.is_within_bounds() and not board.is_occupied(push):
        squares.append(push)

    for d_row, d_col in pawn_capture_deltas(piece.color):
        target_square = piece.square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue
        occupant = board.piece(target_square)
        if occupant is not None and occupant.is_opponent_of(piece):
            squares.append(target_square)
    return squares


def candidate_knight_moves(piece: Piece, board: Board) -> list[Square]:
    return single_step_move(piece, board, KNIGHT_DELTAS)


def candidate_bishop_moves(piece: Piece, board: Board) -> list[Square]:
    return raycasting_move(piece, board, DIAGONALS)


def candidate_rook_moves(piece: Piece, board: Board) -> list[Square]:
    return raycasting_move(piece, board, STRAIGHTS)


def candidate_queen_moves(piece: Piece, board: Board) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(piece, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(piece: Piece, board: Board) -> list[Square]:
    """The king can move by a single square at the time. Whether the square is safe is checked by the legality filter."""
    return single_step_move(piece, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Piece, Board], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(piece: Piece, board: Board) -> list[Square]:
    """Movement geometry only: squares reachable before checking for the safety of your own king."""
    return MOVEMENT_RULES[piece.type](piece, board)


# --- LEGALITY ---
def leaves_king_attacked(piece: Piece, to_square: Square, board: Board) -> bool:
    """Return True if the move puts (or leaves) your own king in check

    plan:
    1. make the candidate move on a new board (the original board is never touched)
    2. ask every opponent piece on the new board if it attacks your king

    NOTE: for a king move the king itself is moved, so this also covers 'do not step into an attacked square'.
    """
    after_move = board.with_move(piece, to_square)
    return any(
        attacks(enemy, after_move) for enemy in after_move.pieces_of(piece.color.opponent)
    )


def legal_moves(piece: Piece, board: Board) -> list[Square]:
    """Squares the piece may legally move to. Fresh list on every call."""
    return [
        square
        for square in candidate_moves(piece, board)
        if not leaves_king_attacked(piece, square, board)
    ]


def is_legal_move(piece: Piece, to_square: Square, board: Board) -> bool:
    return to_square in legal_moves(piece, board)
