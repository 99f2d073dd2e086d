"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_DB_PATH = DATA_DIR / "chatflow.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_ADMIN_ID = 364448153


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _optional(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""

    telegram_token: str | None = None
    bot_username: str | None = None
    admin_id: int = DEFAULT_ADMIN_ID
    database_url: str | None = None
    log_level: str = "INFO"
    api_host: str = "localhost"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: if BOT_ADMIN_ID or API_PORT is not an integer.
        """
        admin_raw = _optional("BOT_ADMIN_ID")
        port_raw = _optional("API_PORT")
        return cls(
            telegram_token=_optional("TELEGRAM_BOT_TOKEN"),
            bot_username=_optional("BOT_USERNAME"),
            admin_id=int(admin_raw) if admin_raw else DEFAULT_ADMIN_ID,
            database_url=_optional("DATABASE_URL"),
            log_level=_optional("LOG_LEVEL") or "INFO",
            api_host=_optional("API_HOST") or "localhost",
            api_port=int(port_raw) if port_raw else 8000,
        )
