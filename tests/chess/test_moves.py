"""Unit tests for /src/chess/moves.py"""

import random
from typing import Callable

import pytest

from src.chess.attacks import is_in_check
from src.chess.board import Board
from src.chess.generator import generate_board
from src.chess.moves import (
    Move,
    candidate_moves,
    is_legal_move,
    leaves_king_attacked,
    legal_moves,
    raycasting_move,
    single_step_move,
)
from src.chess.pieces import SLIDING_PIECES, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import MalformedNotationError


def piece_on(board: Board, name: str) -> Piece:
    piece = board.piece(Square.from_algebraic(name))
    assert piece is not None
    return piece


def names(squares: list[Square]) -> set[str]:
    return {square.to_algebraic() for square in squares}


# -- MOVE ENCODING / DECODING UCI NOTATION ---
@pytest.mark.parametrize(
    "uci_move, from_uci, to_uci",
    [
        ("e2e4", "e2", "e4"),
        ("a1a5", "a1", "a5"),
        ("g1f3", "g1", "f3"),
    ],
)
def test_move_uci(uci_move: str, from_uci: str, to_uci: str) -> None:
    move = Move.from_uci(uci_move)
    assert move == Move(Square.from_algebraic(from_uci), Square.from_algebraic(to_uci))
    assert move.to_uci() == uci_move


@pytest.mark.parametrize("uci_move", ["e2e", "e2e4q", "z1a1", ""])
def test_malformed_uci(uci_move: str) -> None:
    with pytest.raises(MalformedNotationError):
        Move.from_uci(uci_move)


# --- MOVEMENT RULES ---
def test_rook_on_open_board(make_board: Callable[..., Board]) -> None:
    """Rook on b2, nothing on its rank or file, kings far away: the whole 2nd rank and b-file are available"""
    board = make_board("Rb2", "Kh8", "ke5")
    moves = names(legal_moves(piece_on(board, "b2"), board))
    assert moves == {"a2", "c2", "d2", "e2", "f2", "g2", "h2"} | {
        "b1",
        "b3",
        "b4",
        "b5",
        "b6",
        "b7",
        "b8",
    }
    assert "b2" not in moves
    assert "a1" not in moves


def test_rook_with_friendly_blocker(make_board: Callable[..., Board]) -> None:
    """Own piece on f2: the ray stops before it"""
    board = make_board("Rb2", "Pf2", "Kh8", "ke5")
    moves = names(legal_moves(piece_on(board, "b2"), board))
    assert {"c2", "d2", "e2"} <= moves
    assert not {"f2", "g2", "h2"} & moves


def test_rook_with_enemy_blocker(make_board: Callable[..., Board]) -> None:
    """Opponent's piece on f2: it can be captured, but nothing behind it is reachable"""
    board = make_board("Rb2", "nf2", "Kh8", "ke5")
    moves = names(legal_moves(piece_on(board, "b2"), board))
    assert "f2" in moves
    assert not {"g2", "h2"} & moves


def test_raycasting_mixed_blockers(make_board: Callable[..., Board]) -> None:
    """Own piece on a7 (cannot move past), opponent's piece on a1 (capture the first one in sight)"""
    board = make_board("Ra5", "Pa7", "pa1")
    moves = raycasting_move(piece_on(board, "a5"), board, [(1, 0), (-1, 0)])
    assert names(moves) == {"a4", "a3", "a2", "a1", "a6"}


def test_bishop_moves(make_board: Callable[..., Board]) -> None:
    board = make_board("Bd2", "pf4", "Kh8", "ka8")
    assert names(candidate_moves(piece_on(board, "d2"), board)) == {
        "c1",
        "e1",
        "c3",
        "b4",
        "a5",
        "e3",
        "f4",
    }


def test_queen_moves_count_on_empty_board(make_board: Callable[..., Board]) -> None:
    """Queen in the center of an otherwise empty board reaches 27 squares"""
    board = make_board("Qd4")
    assert len(legal_moves(piece_on(board, "d4"), board)) == 27


def test_single_step_out_of_bounds(make_board: Callable[..., Board]) -> None:
    board = make_board("Nd4")
    assert single_step_move(piece_on(board, "d4"), board, [(42, 23)]) == []


def test_knight_moves(make_board: Callable[..., Board]) -> None:
    """Friendly piece on e2 blocks that landing square, the knight jumps over everything else"""
    board = make_board("Ng1", "Pe2", "pf3", "pg2", "Ke1", "ke8")
    assert names(legal_moves(piece_on(board, "g1"), board)) == {"f3", "h3"}


def test_knight_in_corner(make_board: Callable[..., Board]) -> None:
    board = make_board("Na1")
    assert names(legal_moves(piece_on(board, "a1"), board)) == {"b3", "c2"}


def test_white_pawn_moves(make_board: Callable[..., Board]) -> None:
    """Single step forward (no double step from the 2nd rank), and diagonal captures"""
    board = make_board("Pe2", "pd3", "Pf3", "Ka1", "ka8")
    assert names(legal_moves(piece_on(board, "e2"), board)) == {"e3", "d3"}


def test_black_pawn_moves_down(make_board: Callable[..., Board]) -> None:
    board = make_board("pe5", "Pf4", "Ka1", "ka8")
    assert names(legal_moves(piece_on(board, "e5"), board)) == {"e4", "f4"}


def test_blocked_pawn(make_board: Callable[..., Board]) -> None:
    """A pawn cannot capture straight ahead"""
    board = make_board("Pe4", "pe5", "Ka1", "ka8")
    assert legal_moves(piece_on(board, "e4"), board) == []


def test_pawn_on_last_rank_is_stuck(make_board: Callable[..., Board]) -> None:
    """No promotion: nowhere to go"""
    board = make_board("Pe8", "Ka1", "kh1")
    assert legal_moves(piece_on(board, "e8"), board) == []


# --- KING SAFETY ---
def test_king_does_not_step_into_attack(make_board: Callable[..., Board]) -> None:
    """Black rook on a2 controls the whole 2nd rank"""
    board = make_board("Ke1", "ra2", "kh8")
    assert names(legal_moves(piece_on(board, "e1"), board)) == {"d1", "f1"}


def test_king_cannot_capture_protected_piece(make_board: Callable[..., Board]) -> None:
    """The queen on e2 is protected by the rook on e8: nothing left for the white king"""
    board = make_board("Ke1", "qe2", "re8", "ka8")
    assert legal_moves(piece_on(board, "e1"), board) == []


def test_king_captures_unprotected_piece(make_board: Callable[..., Board]) -> None:
    board = make_board("Ke1", "qe2", "ka8")
    assert names(legal_moves(piece_on(board, "e1"), board)) == {"e2"}


def test_kings_keep_distance(make_board: Callable[..., Board]) -> None:
    board = make_board("Ke1", "ke3")
    assert names(legal_moves(piece_on(board, "e1"), board)) == {"d1", "f1"}


def test_pinned_piece_cannot_leave_the_line(make_board: Callable[..., Board]) -> None:
    """Bishop on e2 shields the king from the rook on e8"""
    board = make_board("Ke1", "Be2", "re8", "ka8")
    assert legal_moves(piece_on(board, "e2"), board) == []


def test_pinned_piece_moves_along_the_line(make_board: Callable[..., Board]) -> None:
    board = make_board("Ke1", "Re2", "re8", "ka8")
    assert names(legal_moves(piece_on(board, "e2"), board)) == {
        "e3",
        "e4",
        "e5",
        "e6",
        "e7",
        "e8",
    }


def test_must_block_check(make_board: Callable[..., Board]) -> None:
    """King in check by the rook on e8: the knight can only help by blocking the e-file"""
    board = make_board("Ke1", "Ng5", "re8", "ka8")
    knight = piece_on(board, "g5")
    assert names(candidate_moves(knight, board)) == {"e4", "e6", "f3", "h3", "f7", "h7"}
    assert names(legal_moves(knight, board)) == {"e4", "e6"}
    assert is_legal_move(knight, Square.from_algebraic("e4"), board)
    assert not is_legal_move(knight, Square.from_algebraic("f3"), board)
    assert leaves_king_attacked(knight, Square.from_algebraic("h7"), board)


def test_legal_moves_do_not_change_the_board(make_board: Callable[..., Board]) -> None:
    board = make_board("Ke1", "Ng5", "re8", "ka8")
    before = dict(board.position)
    first = legal_moves(piece_on(board, "g5"), board)
    second = legal_moves(piece_on(board, "g5"), board)
    assert board.position == before
    assert first == second
    assert first is not second


# --- PROPERTIES ON RANDOM BOARDS ---
def _squares_between(origin: Square, destination: Square) -> list[Square]:
    """Squares strictly between two squares on the same line"""
    d_row = (destination.row > origin.row) - (destination.row < origin.row)
    d_col = (destination.col > origin.col) - (destination.col < origin.col)
    between: list[Square] = []
    current = origin.offset(d_row, d_col)
    while current != destination:
        between.append(current)
        current = current.offset(d_row, d_col)
    return between


@pytest.mark.parametrize("seed", range(25))
def test_legal_move_properties_on_random_boards(seed: int) -> None:
    board = generate_board(random.Random(seed))
    for piece in board.pieces:
        for destination in legal_moves(piece, board):
            # on the board
            assert destination.is_within_bounds()

            # never onto your own piece
            occupant = board.piece(destination)
            assert occupant is None or occupant.color != piece.color

            # sliding pieces do not jump over anything
            if piece.type in SLIDING_PIECES:
                assert all(
                    not board.is_occupied(square)
                    for square in _squares_between(piece.square, destination)
                )

            # the move does not leave your own king attacked
            assert not is_in_check(piece.color, board.with_move(piece, destination))


def test_king_move_rejected_when_square_attacked(make_board: Callable[..., Board]) -> None:
    """A king can not hide behind itself: moving along the line of the attacker stays attacked"""
    board = make_board("Kd1", "ra1", "kh8")
    king = piece_on(board, "d1")
    assert PieceType.KING == king.type
    assert names(legal_moves(king, board)) == {"c2", "d2", "e2"}
