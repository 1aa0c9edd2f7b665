"""
Settings of the puzzle game.

Defaults are the values the game is played with. They can be overridden with environment variables,
prefixed with CHESS_PUZZLE_ (ex. CHESS_PUZZLE_MAX_GUESSES=8).
"""

import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ENV_PREFIX = "CHESS_PUZZLE_"


class PuzzleSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # --- game rules ---
    max_guesses: int = Field(6, gt=0)
    turn_time_limit: float = Field(30.0, gt=0)  # seconds per turn

    # --- board generation ---
    extra_pieces: int = Field(6, ge=0, le=62)
    placement_attempts: int = Field(100, gt=0)
    board_attempts: int = Field(300, gt=0)

    # --- persistence ---
    database_url: str = "sqlite:///./puzzles.db"


def load_settings(environ: dict[str, str] | None = None) -> PuzzleSettings:
    """Build the settings from (prefixed) environment variables, falling back to the defaults.

    Raises:
        ValueError: If any of the supplied values fails validation.
    """
    environ = dict(os.environ) if environ is None else environ
    overrides = {
        name: environ[f"{ENV_PREFIX}{name.upper()}"]
        for name in PuzzleSettings.model_fields
        if f"{ENV_PREFIX}{name.upper()}" in environ
    }
    try:
        return PuzzleSettings(**overrides)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}") from e
