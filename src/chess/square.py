"""
A square on the board + conversion from/to algebraic notation

(placed in its own module as multiple other modules need to import it)

Coordinates are (row, col), both 0-based:
* row 0 is the far rank (rank 8), row 7 is rank 1
* col 0 is the a-file, col 7 the h-file
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import MalformedNotationError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)

FILES = "abcdefgh"[: BOARD_DIMENSIONS[1]]
RANKS = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[0] + 1))


@dataclass(frozen=True, order=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0, 0), 'h1' to (7, 7)"""
        if len(sq) != 2 or sq[0] not in FILES or sq[1] not in RANKS:
            raise MalformedNotationError(
                f"Cannot interpret {sq!r} as a square. Expected a file ({FILES[0]}-{FILES[-1]}) followed by a rank ({RANKS[0]}-{RANKS[-1]})."
            )
        col = FILES.index(sq[0])
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """Square shifted by the given vector. NOTE: may fall off the board, check with is_within_bounds()"""
        return Square(self.row + d_row, self.col + d_col)

    def is_adjacent(self, other: Square) -> bool:
        """Touching squares, in any of the 8 directions (Chebyshev distance of 1)"""
        return self != other and max(
            abs(self.row - other.row), abs(self.col - other.col)
        ) <= 1


def all_squares() -> list[Square]:
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]


def to_notation(square: Square) -> str:
    return square.to_algebraic()


def from_notation(text: str) -> Square:
    return Square.from_algebraic(text)
