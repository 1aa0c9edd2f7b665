"""Database sessions, and wiring of a PuzzleService onto the SQL repository"""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import PuzzleSettings, load_settings
from src.db.schema import Base
from src.db.sql_repository import SQLPuzzleRepository
from src.services.puzzle_service import PuzzleService


def create_session_factory(database_url: Optional[str] = None) -> sessionmaker[Session]:
    """Engine for the configured database (or the given url), with all tables created."""
    engine = create_engine(database_url or load_settings().database_url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def build_service(db: Session, settings: Optional[PuzzleSettings] = None) -> PuzzleService:
    return PuzzleService(SQLPuzzleRepository(db), settings or load_settings())
