"""
Attacking rules
-----

"Does this piece attack that square?" and, the question the rest of the engine asks the most:
"Does this piece attack the opposing king?"

Key idea: same strategy pattern as the movement rules (see moves.py), one attack rule per piece type.
Whose turn it is does not matter for an attack.
"""

from typing import Callable

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

Vector = tuple[int, int]  # (d_row, d_col)

# --- GEOMETRY (shared with moves.py) ---
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def pawn_capture_deltas(color: Color) -> list[Vector]:
    """Pawns take diagonally, one square forward. White moves UP the board (decreasing row)."""
    return [(color.forward, -1), (color.forward, 1)]


# --- ATTACK RULES ---
def raycasting_attack(
    piece: Piece, square: Square, board: Board, directions: list[Vector]
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Walk from the piece along each direction until the target square, the edge of the board, or a blocking piece is hit.
    The target is only attacked when every square strictly in between is empty.
    """
    for d_row, d_col in directions:
        current = piece.square.offset(d_row, d_col)
        while current.is_within_bounds():
            if current == square:
                return True
            if board.is_occupied(current):
                # line of sight is blocked
                break
            current = current.offset(d_row, d_col)
    return False


def single_step_attack(piece: Piece, square: Square, deltas: list[Vector]) -> bool:
    """Equivalent of raycasting for pawns, kings, and knights: these only reach a single step along a direction."""
    return any(piece.square.offset(d_row, d_col) == square for d_row, d_col in deltas)


def is_attacked_by_pawn(piece: Piece, square: Square, board: Board) -> bool:
    return single_step_attack(piece, square, pawn_capture_deltas(piece.color))


def is_attacked_by_knight(piece: Piece, square: Square, board: Board) -> bool:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_attack(piece, square, KNIGHT_DELTAS)


def is_attacked_by_bishop(piece: Piece, square: Square, board: Board) -> bool:
    return raycasting_attack(piece, square, board, DIAGONALS)


def is_attacked_by_rook(piece: Piece, square: Square, board: Board) -> bool:
    return raycasting_attack(piece, square, board, STRAIGHTS)


def is_attacked_by_queen(piece: Piece, square: Square, board: Board) -> bool:
    """The Queen combines the rook (straight lines) and the bishop (diagonals)"""
    return raycasting_attack(piece, square, board, STRAIGHTS + DIAGONALS)


def is_attacked_by_king(piece: Piece, square: Square, board: Board) -> bool:
    return single_step_attack(piece, square, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Piece, Square, Board], bool]
ATTACK_RULES: dict[PieceType, IsAttackedFn] = {
    PieceType.PAWN: is_attacked_by_pawn,
    PieceType.KNIGHT: is_attacked_by_knight,
    PieceType.BISHOP: is_attacked_by_bishop,
    PieceType.ROOK: is_attacked_by_rook,
    PieceType.QUEEN: is_attacked_by_queen,
    PieceType.KING: is_attacked_by_king,
}


def attacks_square(piece: Piece, square: Square, board: Board) -> bool:
    if square == piece.square:
        return False
    return ATTACK_RULES[piece.type](piece, square, board)


def attacks(piece: Piece, board: Board) -> bool:
    """True if the piece attacks the king of the opposite color. No such king on the board? Then nothing is attacked."""
    opposing_king = board.king(piece.color.opponent)
    if opposing_king is None:
        return False
    return attacks_square(piece, opposing_king.square, board)


def is_in_check(color: Color, board: Board) -> bool:
    """Is the king of the given color attacked by any of the opponent's pieces?"""
    return any(attacks(enemy, board) for enemy in board.pieces_of(color.opponent))
