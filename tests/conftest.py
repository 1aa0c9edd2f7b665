"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """
    Call the inner function with pieces written as <FEN letter><square>.

    ex. make_board("Ke1", "ke8", "Ng1"): white king on e1, black king on e8, white knight on g1
    """

    def _create_board(*placements: str) -> Board:
        return Board.from_pieces(
            Piece.from_fen(placement[0], Square.from_algebraic(placement[1:]))
            for placement in placements
        )

    return _create_board
