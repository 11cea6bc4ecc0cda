import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .normalize import MAX_INPUT_CHARS


def load_env() -> None:
    """Load .env from the working directory if present.
    Existing environment variables win over .env values.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


def _optional_path(var: str) -> Optional[Path]:
    value = os.getenv(var, "").strip()
    return Path(value) if value else None


@dataclass
class Settings:
    """Runtime settings, read from SHORTLIST_* environment variables."""

    seed_path: Optional[Path] = None
    seed_db: Optional[Path] = None
    max_input_chars: int = MAX_INPUT_CHARS
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        raw_limit = os.getenv("SHORTLIST_MAX_INPUT_CHARS", "").strip()
        try:
            max_input_chars = int(raw_limit) if raw_limit else MAX_INPUT_CHARS
        except ValueError as e:
            raise ValueError(f"SHORTLIST_MAX_INPUT_CHARS must be an integer, got {raw_limit!r}") from e
        if max_input_chars < 0:
            raise ValueError(f"SHORTLIST_MAX_INPUT_CHARS must be 0 or more, got {max_input_chars}")
        return cls(
            seed_path=_optional_path("SHORTLIST_SEED_PATH"),
            seed_db=_optional_path("SHORTLIST_SEED_DB"),
            max_input_chars=max_input_chars,
            log_level=os.getenv("SHORTLIST_LOG_LEVEL", "WARNING").upper(),
            log_dir=_optional_path("SHORTLIST_LOG_DIR"),
        )
