import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .game import DEFAULT_ATTEMPTS_LIMIT

_FALSY = {"0", "false", "no", "off"}
_UNLIMITED = {"none", "unlimited", "inf"}


@dataclass(frozen=True)
class Settings:
    """Defaults for the terminal game, read from the environment (and a .env file)."""
    words_path: Optional[Path] = None
    attempts_limit: Optional[int] = DEFAULT_ATTEMPTS_LIMIT
    color: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Settings":
        """
        Builds settings from WORDLE_* variables.

        Raises:
            ValueError: if a variable holds a value that can't be used.
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        words_path = environ.get("WORDLE_WORDS_PATH") or None

        return cls(
            words_path=Path(words_path) if words_path else None,
            attempts_limit=parse_attempts_limit(environ.get("WORDLE_MAX_ATTEMPTS", str(DEFAULT_ATTEMPTS_LIMIT))),
            color=environ.get("WORDLE_COLOR", "1").strip().lower() not in _FALSY,
            log_level=parse_log_level(environ.get("WORDLE_LOG_LEVEL", "WARNING")),
        )


def parse_attempts_limit(value: str) -> Optional[int]:
    value = value.strip().lower()
    if value in _UNLIMITED:
        return None
    try:
        limit = int(value)
    except ValueError:
        raise ValueError(f"Invalid attempts limit '{value}': expected a number or 'unlimited'.") from None
    if limit < 0:
        raise ValueError(f"Invalid attempts limit '{value}': must not be negative.")
    return limit


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid log level '{value}'.")
    return level
