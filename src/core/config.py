"""Application configuration.

Read from environment variables prefixed with CHESS_ (or a .env.chess file), ex.

    CHESS_LOG_LEVEL=DEBUG
    CHESS_STARTING_LAYOUT=....k.../......../......../......../......../......../......../....K...
    (see src/chess/layout.py)
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.shared_types import Color


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHESS_", env_file=".env.chess", env_file_encoding="utf-8"
    )

    log_level: str = "INFO"

    # Position new games start from. None means the standard starting layout.
    starting_layout: Optional[str] = None
    starting_turn: Color = Color.WHITE


@lru_cache
def get_settings() -> Settings:
    return Settings()
