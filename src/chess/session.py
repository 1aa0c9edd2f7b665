"""
The PuzzleSession is the entrypoint into the domain layer for the service layer.
It holds one puzzle (board + hidden target) and everything that happens while a player tries to solve it:
guesses made, turns lost to the clock, and whether the puzzle is still running.
"""

import math
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board
from src.chess.guess import Feedback, Guess, check_guess, evaluate
from src.chess.moves import Move, legal_moves
from src.chess.pieces import Color, PieceType
from src.chess.puzzle import Target, new_puzzle
from src.chess.square import Square
from src.core.config import PuzzleSettings
from src.core.exceptions import GameStateError
from src.core.models import PuzzleModel, TurnModel


class Status(Enum):
    IN_PROGRESS = auto()
    SOLVED = auto()
    EXHAUSTED = auto()


TIMEOUT_FEEDBACK = "time's up"


@dataclass(frozen=True)
class Turn:
    """A used turn: either a (valid) guess with its feedback, or a turn lost to the clock."""

    guess: Optional[Guess] = None
    feedback: Optional[Feedback] = None

    @property
    def timed_out(self) -> bool:
        return self.guess is None


@dataclass
class PuzzleSession:
    board: Board
    target: Target
    turns: list[Turn] = field(default_factory=list)
    time_remaining: float = 0.0
    status: Status = Status.IN_PROGRESS
    settings: PuzzleSettings = field(default_factory=PuzzleSettings)

    @classmethod
    def new(
        cls, rng: Optional[random.Random] = None, settings: Optional[PuzzleSettings] = None
    ) -> Self:
        """Start a fresh puzzle: random board, random hidden target, full clock."""
        settings = settings or PuzzleSettings()
        board, target = new_puzzle(rng, settings)
        return cls(board, target, time_remaining=settings.turn_time_limit, settings=settings)

    @classmethod
    def from_model(cls, model: PuzzleModel, settings: Optional[PuzzleSettings] = None) -> Self:
        """Define how to construct a session from the information the Service layer actually has"""
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )

        target_move = Move.from_uci(model.target_move_uci)
        target = Target(
            piece_type=_piece_type(model.target_piece_type),
            color=_color(model.target_color),
            origin=target_move.from_square,
            destination=target_move.to_square,
        )
        turns = [_turn_from_model(turn, target) for turn in model.turns]
        return cls(
            board=Board.from_fen(model.board_fen),
            target=target,
            turns=turns,
            time_remaining=model.time_remaining,
            status=Status[status_name],
            settings=settings or PuzzleSettings(),
        )

    def to_model(self) -> PuzzleModel:
        """Encode back into a format the Service layer uses"""
        return PuzzleModel(
            board_fen=self.board.to_fen(),
            target_piece_type=self.target.piece_type.name.lower(),
            target_color=self.target.color.name.lower(),
            target_move_uci=self.target.move.to_uci(),
            turns=[_turn_to_model(turn) for turn in self.turns],
            time_remaining=self.time_remaining,
            status=self.status.name.lower().replace("_", " "),
        )

    # --- STATE ---
    @property
    def is_finished(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def guesses_left(self) -> int:
        return max(self.settings.max_guesses - len(self.turns), 0)

    @property
    def revealed_target(self) -> Optional[Target]:
        """The answer is only given away once the puzzle is over."""
        return self.target if self.is_finished else None

    # --- ACTIONS ---
    def legal_moves_from(self, square: Square) -> list[Square]:
        """Legal destinations of the piece on the square (empty for an empty square). Used for move hints."""
        piece = self.board.piece(square)
        if piece is None:
            return []
        return legal_moves(piece, self.board)

    def submit_guess(self, guess: Guess) -> Feedback:
        """
        Attempt a guess
        -----

        1. an invalid guess (wrong piece on the origin / illegal destination) is rejected and costs nothing
        2. a valid guess uses up a turn and restarts the clock
        3. solved? or out of guesses? --> the session is over
        """
        self._assert_in_progress()

        feedback = check_guess(guess, self.board, self.target)
        if not feedback.valid:
            return feedback

        self.turns.append(Turn(guess, feedback))
        if feedback.exact_match:
            self._change_status(Status.SOLVED)
        else:
            self._update_exhausted()
        self._reset_clock()
        return feedback

    def time_out(self) -> None:
        """The clock ran out on the current turn: the turn is lost."""
        self._assert_in_progress()
        self.turns.append(Turn())
        self._update_exhausted()
        self._reset_clock()

    def elapse(self, seconds: float) -> int:
        """
        Let time pass on the clock. Every time it hits zero a turn is lost and the clock restarts.
        Returns the number of turns lost.
        """
        self._assert_in_progress()
        if not math.isfinite(seconds) or seconds < 0:
            raise GameStateError(f"Elapsed time must be finite and non-negative. Got {seconds} seconds.")

        lost = 0
        self.time_remaining -= seconds
        while self.time_remaining <= 0 and not self.is_finished:
            overshoot = -self.time_remaining
            self.time_out()
            lost += 1
            if not self.is_finished:
                self.time_remaining -= overshoot
        return lost

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.is_finished:
            raise GameStateError(
                f"Puzzle is over. status: {self.status.name.lower().replace('_', ' ')}"
            )

    def _update_exhausted(self) -> None:
        if len(self.turns) >= self.settings.max_guesses:
            self._change_status(Status.EXHAUSTED)

    def _reset_clock(self) -> None:
        self.time_remaining = 0.0 if self.is_finished else self.settings.turn_time_limit

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status


# --- MODEL CONVERSION HELPERS ---
def _piece_type(name: str) -> PieceType:
    if name.upper() not in PieceType.__members__:
        raise GameStateError(f"Unknown piece type: {name!r}")
    return PieceType[name.upper()]


def _color(name: str) -> Color:
    if name.upper() not in Color.__members__:
        raise GameStateError(f"Unknown color: {name!r}")
    return Color[name.upper()]


def _turn_to_model(turn: Turn) -> TurnModel:
    if turn.guess is None:
        return TurnModel(
            piece_type=None,
            color=None,
            move_uci=None,
            feedback=TIMEOUT_FEEDBACK,
            timed_out=True,
        )
    if turn.feedback is None:
        raise GameStateError(f"Turn {turn!r} has a guess but no feedback")
    return TurnModel(
        piece_type=turn.guess.piece_type.name.lower(),
        color=turn.guess.color.name.lower(),
        move_uci=turn.guess.move.to_uci(),
        feedback=turn.feedback.headline.value,
    )


def _turn_from_model(model: TurnModel, target: Target) -> Turn:
    """Feedback is not trusted from storage: it is recomputed against the target."""
    if model.timed_out or model.move_uci is None:
        return Turn()
    if model.piece_type is None or model.color is None:
        raise GameStateError(f"Turn {model!r} has a move but no piece type/color")
    move = Move.from_uci(model.move_uci)
    guess = Guess(
        piece_type=_piece_type(model.piece_type),
        color=_color(model.color),
        origin=move.from_square,
        destination=move.to_square,
    )
    return Turn(guess, evaluate(guess, target))
