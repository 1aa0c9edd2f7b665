"""Implementation of (Puzzle)Repository using SQLAlchemy"""

from dataclasses import asdict
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import PuzzleModel, TurnModel
from src.db.schema import DBPuzzle


class SQLPuzzleRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_puzzle(self, puzzle_id: UUID) -> PuzzleModel | None:
        """Get puzzle by ID, if record exists."""
        puzzle_db = self._fetch_puzzle(puzzle_id)
        if puzzle_db:
            return self._to_model(puzzle_db)
        return None

    def create_puzzle(self, puzzle: PuzzleModel) -> tuple[PuzzleModel, UUID]:
        """Store new puzzle and return the stored data + newly created puzzle ID."""
        new_id = uuid4()
        puzzle_db = DBPuzzle(
            id=new_id,
            board_fen=puzzle.board_fen,
            target_piece_type=puzzle.target_piece_type,
            target_color=puzzle.target_color,
            target_move_uci=puzzle.target_move_uci,
            turns=[asdict(turn) for turn in puzzle.turns],
            time_remaining=puzzle.time_remaining,
            status=puzzle.status,
        )
        self.db.add(puzzle_db)
        self.db.commit()
        self.db.refresh(puzzle_db)
        return self._to_model(puzzle_db), new_id

    def update_puzzle(self, puzzle_id: UUID, puzzle: PuzzleModel) -> PuzzleModel | None:
        """Add new info to existing record. Board and target never change, so only the progress is written."""
        puzzle_db = self._fetch_puzzle(puzzle_id)
        if not puzzle_db:
            return None
        puzzle_db.turns = [asdict(turn) for turn in puzzle.turns]
        puzzle_db.time_remaining = puzzle.time_remaining
        puzzle_db.status = puzzle.status
        self.db.commit()
        self.db.refresh(puzzle_db)
        return self._to_model(puzzle_db)

    def delete_puzzle(self, puzzle_id: UUID) -> PuzzleModel | None:
        """Remove a puzzle's record."""
        puzzle_db = self._fetch_puzzle(puzzle_id)
        if not puzzle_db:
            return None
        puzzle_model = self._to_model(puzzle_db)
        self.db.delete(puzzle_db)
        self.db.commit()
        return puzzle_model

    def _fetch_puzzle(self, puzzle_id: UUID) -> DBPuzzle | None:
        query = select(DBPuzzle).where(DBPuzzle.id == puzzle_id)
        return self.db.scalar(query)

    def _to_model(self, puzzle_db: DBPuzzle) -> PuzzleModel:
        """Convert SQLAlchemy model to data transfer model."""
        return PuzzleModel(
            board_fen=puzzle_db.board_fen,
            target_piece_type=puzzle_db.target_piece_type,
            target_color=puzzle_db.target_color,
            target_move_uci=puzzle_db.target_move_uci,
            turns=[TurnModel(**turn) for turn in puzzle_db.turns],
            time_remaining=puzzle_db.time_remaining,
            status=puzzle_db.status,
        )
