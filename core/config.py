from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.query_builder import DEFAULT_SEARCH_URL

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Settings:
    """Runtime settings, read from the environment (and .env via python-dotenv)."""

    search_url: str = DEFAULT_SEARCH_URL
    media: str = "music"
    timeout: float = 60.0
    artwork_cache_size: int = 200
    log_level: str = "INFO"
    library_log_level: str = "WARNING"
    log_file: Optional[Path] = None

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("ITUNES_TIMEOUT must be > 0")
        if self.artwork_cache_size < 1:
            raise ValueError("ITUNES_ARTWORK_CACHE_SIZE must be >= 1")
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}")
        self.library_log_level = self.library_log_level.upper()
        if self.library_log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LIBRARY_LEVEL must be one of {VALID_LOG_LEVELS}")
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file).expanduser()

    @classmethod
    def from_env(cls) -> "Settings":
        log_file = os.getenv("LOG_FILE", "").strip()
        settings = cls(
            search_url=os.getenv("ITUNES_SEARCH_URL", DEFAULT_SEARCH_URL).strip() or DEFAULT_SEARCH_URL,
            media=os.getenv("ITUNES_MEDIA", "music").strip() or "music",
            timeout=_env_number("ITUNES_TIMEOUT", 60.0, float),
            artwork_cache_size=_env_number("ITUNES_ARTWORK_CACHE_SIZE", 200, int),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip() or "INFO",
            library_log_level=os.getenv("LOG_LIBRARY_LEVEL", "WARNING").strip() or "WARNING",
            log_file=Path(log_file).expanduser() if log_file else None,
        )
        logging.getLogger(__name__).debug("Loaded settings: %s", settings)
        return settings


def _env_number(name: str, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
