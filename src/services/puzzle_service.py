"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreatePuzzleRequest,
    DeletePuzzleRequest,
    GetPuzzleRequest,
    GuessRequest,
    GuessResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    PieceResponse,
    PuzzleResponse,
    TargetResponse,
    TimeoutRequest,
    TurnResponse,
)
from src.chess import pieces
from src.chess.guess import Guess
from src.chess.session import PuzzleSession
from src.chess.square import Square
from src.core.config import PuzzleSettings
from src.core.exceptions import RepositoryError
from src.core.models import PuzzleModel
from src.core.shared_types import Color, PieceType, Status
from src.db.repository import PuzzleRepository

logger = logging.getLogger(__name__)


class PuzzleService:
    """Orchestration of layers for the guess-the-move puzzle."""

    def __init__(
        self,
        repository: PuzzleRepository,
        settings: Optional[PuzzleSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or PuzzleSettings()
        self.rng = rng or random.Random()

    # -- API routes logic ---
    def create_puzzle(self, request: CreatePuzzleRequest) -> PuzzleResponse:
        """Player requested a new puzzle."""

        # A seed in the request gives a reproducible puzzle, otherwise use the service's own source of randomness
        rng = random.Random(request.seed) if request.seed is not None else self.rng

        # Generate board + hidden target, and convert into PuzzleModel
        session = PuzzleSession.new(rng, self.settings)
        created_model = session.to_model()

        # Store the PuzzleModel in the repository
        stored_model, puzzle_id = self.repo.create_puzzle(created_model)
        logger.info("Created puzzle %s with %d pieces", puzzle_id, len(session.board.pieces))

        return self._create_puzzle_response(puzzle_id, stored_model)

    def get_puzzle(self, request: GetPuzzleRequest) -> PuzzleResponse:
        """
        Retrieve current puzzle state.
        ----
        Used by the frontend to redraw the board / the list of guesses made so far.
        """
        puzzle_model = self._fetch_puzzle(request.puzzle_id)
        return self._create_puzzle_response(request.puzzle_id, puzzle_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal destinations for the piece on the requested square (e.g. to highlight while dragging)."""
        session = self._load_session(request.puzzle_id)
        destinations = session.legal_moves_from(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            puzzle_id=request.puzzle_id,
            square=request.square,
            legal_moves=[square.to_algebraic() for square in destinations],
        )

    def submit_guess(self, request: GuessRequest) -> GuessResponse:
        """Make a guess attempt. Invalid guesses are reported back, but are not stored (they do not use up a turn)."""
        session = self._load_session(request.puzzle_id)

        guess = Guess(
            piece_type=pieces.PieceType[request.piece_type.name],
            color=pieces.Color[request.color.name],
            origin=Square.from_algebraic(request.from_square),
            destination=Square.from_algebraic(request.to_square),
        )
        feedback = session.submit_guess(guess)
        after_guess = session.to_model()

        if feedback.valid:
            self.repo.update_puzzle(request.puzzle_id, after_guess)
            if session.is_finished:
                logger.info(
                    "Puzzle %s finished after %d turns: %s",
                    request.puzzle_id,
                    len(session.turns),
                    session.status.name.lower(),
                )

        return GuessResponse(
            puzzle_id=request.puzzle_id,
            valid=feedback.valid,
            exact_match=feedback.exact_match,
            wrong_kind=feedback.wrong_kind,
            wrong_color=feedback.wrong_color,
            wrong_origin=feedback.wrong_origin,
            wrong_destination=feedback.wrong_destination,
            headline=feedback.headline,
            message=feedback.message,
            guesses_left=session.guesses_left,
            status=Status(after_guess.status),
        )

    def time_out(self, request: TimeoutRequest) -> PuzzleResponse:
        """The frontend's clock ran out: the current turn is lost."""
        session = self._load_session(request.puzzle_id)
        session.time_out()
        after_timeout = session.to_model()
        self.repo.update_puzzle(request.puzzle_id, after_timeout)
        return self._create_puzzle_response(request.puzzle_id, after_timeout)

    def delete_puzzle(self, request: DeletePuzzleRequest) -> None:
        """Handle a request to delete a puzzle record."""
        self.repo.delete_puzzle(request.puzzle_id)

    # -- Internal helpers --
    def _create_puzzle_response(self, puzzle_id: UUID, model: PuzzleModel) -> PuzzleResponse:
        """Convert info in PuzzleModel to a PuzzleResponse. The target stays hidden until the puzzle is over."""
        session = PuzzleSession.from_model(model, self.settings)
        revealed = session.revealed_target
        target = (
            TargetResponse(
                piece_type=PieceType(model.target_piece_type),
                color=Color(model.target_color),
                from_square=revealed.origin.to_algebraic(),
                to_square=revealed.destination.to_algebraic(),
            )
            if revealed is not None
            else None
        )
        return PuzzleResponse(
            puzzle_id=puzzle_id,
            board_fen=model.board_fen,
            pieces=[
                PieceResponse(
                    piece_type=PieceType[piece.type.name],
                    color=Color[piece.color.name],
                    square=piece.square.to_algebraic(),
                )
                for piece in session.board.pieces
            ],
            status=Status(model.status),
            guesses_left=session.guesses_left,
            time_remaining=model.time_remaining,
            turns=[
                TurnResponse(
                    piece_type=PieceType(turn.piece_type) if turn.piece_type else None,
                    color=Color(turn.color) if turn.color else None,
                    move=turn.move_uci,
                    feedback=turn.feedback,
                    timed_out=turn.timed_out,
                )
                for turn in model.turns
            ],
            target=target,
        )

    def _load_session(self, puzzle_id: UUID) -> PuzzleSession:
        return PuzzleSession.from_model(self._fetch_puzzle(puzzle_id), self.settings)

    def _fetch_puzzle(self, puzzle_id: UUID) -> PuzzleModel:
        """Attempt to find the puzzle in the repository and raise error if it fails."""
        puzzle_model = self.repo.get_puzzle(puzzle_id)
        if puzzle_model is None:
            raise RepositoryError(f"Puzzle with {puzzle_id=} not found.")
        return puzzle_model
