"""The Board holds the `position` (in chess: the configuration of pieces on the board). It never changes in place:
hypothetical moves create a new Board."""

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Self

from src.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import InvalidBoardError


@dataclass(frozen=True)
class Board:
    # only occupied squares are stored. Read-only view over a private copy.
    position: Mapping[Square, Piece] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", MappingProxyType(dict(self.position)))
        for square, piece in self.position.items():
            if piece.square != square:
                raise InvalidBoardError(
                    f"Piece {piece} is registered on {square.to_algebraic()}, but claims to stand on {piece.square.to_algebraic()}."
                )
        king_count = Counter(
            piece.color for piece in self.position.values() if piece.type == PieceType.KING
        )
        for color, count in king_count.items():
            if count > 1:
                raise InvalidBoardError(
                    f"At most one king per color allowed. Found {count} {color.name.lower()} kings."
                )

    def __hash__(self) -> int:
        return hash(frozenset(self.position.items()))

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Self:
        position: dict[Square, Piece] = {}
        for piece in pieces:
            if piece.square in position:
                raise InvalidBoardError(
                    f"Two pieces on the same square: {piece.square.to_algebraic()}"
                )
            position[piece.square] = piece
        return cls(position)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first part of a FEN string: the one that denotes the board position

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces.
        """
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[0]:
            raise InvalidBoardError(
                f"Expected {BOARD_DIMENSIONS[0]} ranks in FEN position, got {len(fen_by_ranks)}: {fen_str!r}"
            )

        pieces: list[Piece] = []
        # FEN string is read from top rank (8th), which is exactly row 0
        for row, fen_one_rank in enumerate(fen_by_ranks):
            col = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                elif character.lower() in FEN_TO_PIECE:
                    pieces.append(Piece.from_fen(character, Square(row, col)))
                    col += 1
                else:
                    raise InvalidBoardError(
                        f"Unknown character {character!r} in FEN position: {fen_str!r}"
                    )
            if col != BOARD_DIMENSIONS[1]:
                raise InvalidBoardError(
                    f"Rank {fen_one_rank!r} does not describe exactly {BOARD_DIMENSIONS[1]} squares."
                )
        return cls.from_pieces(pieces)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- LOOKUPS ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_occupied(self, square: Square) -> bool:
        return square in self.position

    @property
    def pieces(self) -> list[Piece]:
        """All pieces, in a fixed order (top-left to bottom-right) so seeded randomness is reproducible."""
        return [self.position[square] for square in sorted(self.position)]

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self.pieces if piece.color == color]

    def king(self, color: Color) -> Optional[Piece]:
        return next(
            (piece for piece in self.pieces_of(color) if piece.type == PieceType.KING),
            None,
        )

    def locate_pieces(self, piece_type: PieceType) -> list[Square]:
        return [piece.square for piece in self.pieces if piece.type == piece_type]

    def empty_squares(self) -> list[Square]:
        return [square for square in all_squares() if square not in self.position]

    # --- NEW BOARDS ---
    def with_piece(self, piece: Piece) -> Self:
        """Copy of the board with one more piece (replaces whatever stood on that square)"""
        return type(self)({**self.position, piece.square: piece})

    def with_move(self, piece: Piece, to_square: Square) -> Self:
        """Copy of the board after moving the piece. Whatever stood on the target square is captured."""
        position = {
            square: other for square, other in self.position.items() if square != piece.square
        }
        position[to_square] = piece.moved_to(to_square)
        return type(self)(position)
