"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make PuzzleModel easier to read
BoardFEN = str
MoveUCI = str


@dataclass
class TurnModel:
    """One used turn. A timeout has no guess attached to it."""

    piece_type: str | None
    color: str | None
    move_uci: MoveUCI | None
    feedback: str
    timed_out: bool = False


@dataclass
class PuzzleModel:
    """Transport-safe representation of a puzzle session used between API, Service, DB, and domain layers."""

    board_fen: BoardFEN
    target_piece_type: str
    target_color: str
    target_move_uci: MoveUCI
    turns: list[TurnModel] = field(default_factory=list)
    time_remaining: float = 0.0
    status: str = "in progress"
