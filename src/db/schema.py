"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBPuzzle(Base):
    __tablename__ = "puzzles"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board_fen: Mapped[str]
    target_piece_type: Mapped[str]
    target_color: Mapped[str]
    target_move_uci: Mapped[str]
    turns: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    time_remaining: Mapped[float]
    status: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
