"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.models import PuzzleModel, TurnModel
from src.core.shared_types import Status
from src.db.sql_repository import SQLPuzzleRepository


def mock_model(**changes) -> PuzzleModel:
    data = dict(
        board_fen="4k3/8/8/8/8/8/8/4K1N1",
        target_piece_type="knight",
        target_color="white",
        target_move_uci="g1f3",
        turns=[],
        time_remaining=30.0,
        status=Status.IN_PROGRESS,
    )
    data.update(changes)
    return PuzzleModel(**data)


def test_create_puzzle(db_session_repo: Session) -> None:
    """Conversion from a PuzzleModel to DBPuzzle for a new entry to the database."""
    model = mock_model(
        turns=[TurnModel(piece_type="knight", color="white", move_uci="g1h3", feedback="wrong destination")]
    )
    repo = SQLPuzzleRepository(db_session_repo)
    record_in_db, _ = repo.create_puzzle(model)
    assert isinstance(record_in_db, PuzzleModel)
    assert record_in_db == model


def test_get_puzzle_by_id(db_session_repo: Session) -> None:
    repo = SQLPuzzleRepository(db_session_repo)
    expected, puzzle_id = repo.create_puzzle(mock_model())
    found = repo.get_puzzle(puzzle_id)
    assert found == expected


def test_get_unknown_puzzle(db_session_repo: Session) -> None:
    """Should return None if ID does not match anything in database."""
    repo = SQLPuzzleRepository(db_session_repo)
    assert repo.get_puzzle(uuid4()) is None

    repo.create_puzzle(mock_model())
    assert repo.get_puzzle(uuid4()) is None


def test_update_puzzle(db_session_repo: Session) -> None:
    repo = SQLPuzzleRepository(db_session_repo)
    _, puzzle_id = repo.create_puzzle(mock_model())

    after = mock_model(
        turns=[
            TurnModel(piece_type="knight", color="white", move_uci="g1h3", feedback="wrong destination"),
            TurnModel(piece_type=None, color=None, move_uci=None, feedback="time's up", timed_out=True),
        ],
        time_remaining=30.0,
    )
    updated = repo.update_puzzle(puzzle_id, after)
    assert updated == after

    # consecutive update
    solved = mock_model(
        turns=after.turns
        + [TurnModel(piece_type="knight", color="white", move_uci="g1f3", feedback="solved")],
        time_remaining=0.0,
        status=Status.SOLVED,
    )
    assert repo.update_puzzle(puzzle_id, solved) == solved
    assert repo.get_puzzle(puzzle_id) == solved


def test_update_unknown_puzzle(db_session_repo: Session) -> None:
    repo = SQLPuzzleRepository(db_session_repo)
    assert repo.update_puzzle(uuid4(), mock_model()) is None


def test_delete_puzzle(db_session_repo: Session) -> None:
    repo = SQLPuzzleRepository(db_session_repo)
    model, puzzle_id = repo.create_puzzle(mock_model())
    assert repo.delete_puzzle(puzzle_id) == model
    assert repo.get_puzzle(puzzle_id) is None
    assert repo.delete_puzzle(puzzle_id) is None
