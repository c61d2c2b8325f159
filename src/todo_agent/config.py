"""Configuration loaded from environment variables.

The entry point loads a .env file first, so values may come from either.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".todo_agent"
STORE_BACKENDS = ("sqlite", "memory")


@dataclass
class AgentConfig:
    """Runtime settings for the todo agent.

    Attributes:
        db_path: SQLite database file used by the sqlite backend.
        store_backend: 'sqlite' (persistent) or 'memory' (lost on exit).
        log_dir: Directory for the JSONL event log.
        log_max_size_mb: Size at which the event log is rotated.
        telegram_token: Bot token; the Telegram front-end needs it.
    """

    db_path: Path = DEFAULT_HOME / "todos.db"
    store_backend: str = "sqlite"
    log_dir: Path = DEFAULT_HOME / "logs"
    log_max_size_mb: float = 10.0
    telegram_token: str | None = None

    def __post_init__(self) -> None:
        self.db_path = Path(self.db_path).expanduser()
        self.log_dir = Path(self.log_dir).expanduser()
        self.store_backend = self.store_backend.strip().lower()

        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"store_backend must be one of {', '.join(STORE_BACKENDS)}, "
                f"got '{self.store_backend}'"
            )
        if self.log_max_size_mb <= 0:
            raise ValueError("log_max_size_mb must be positive")


def load_config() -> AgentConfig:
    """Build AgentConfig from TODO_* and TELEGRAM_TOKEN environment variables.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    try:
        max_mb = float(os.getenv("TODO_LOG_MAX_MB", "10"))
    except ValueError as e:
        raise ValueError(f"TODO_LOG_MAX_MB must be a number: {e}") from e

    config = AgentConfig(
        db_path=Path(os.getenv("TODO_DB_PATH", str(DEFAULT_HOME / "todos.db"))),
        store_backend=os.getenv("TODO_STORE", "sqlite"),
        log_dir=Path(os.getenv("TODO_LOG_DIR", str(DEFAULT_HOME / "logs"))),
        log_max_size_mb=max_mb,
        telegram_token=os.getenv("TELEGRAM_TOKEN") or None,
    )
    logger.debug("Loaded config backend=%s db=%s", config.store_backend, config.db_path)
    return config
