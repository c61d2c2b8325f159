"""Todo agent entry point."""

import asyncio
import logging
import os
import sys

from dotenv import find_dotenv, load_dotenv

from .cli import run_cli

DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(name: str | None) -> int | None:
    """Numeric level for a level name like 'info', or None if unknown."""
    level = logging.getLevelName((name or DEFAULT_LOG_LEVEL).strip().upper())
    return level if isinstance(level, int) else None


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))

    level_name = os.getenv("TODO_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    level = resolve_log_level(level_name)
    logging.basicConfig(
        level=level if level is not None else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if level is None:
        logging.getLogger(__name__).warning(
            "Unknown TODO_LOG_LEVEL %r, using %s", level_name, DEFAULT_LOG_LEVEL
        )

    if len(sys.argv) > 1:
        command = sys.argv[1]

        if command == "bot":
            from .telegram import run_telegram_bot

            run_telegram_bot()
            return

    asyncio.run(run_cli())


if __name__ == "__main__":
    main()
