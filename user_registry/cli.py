"""Command line entry point: load the user store and serve it over HTTP."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from pydantic import ValidationError

from user_registry.errors import StoreError
from user_registry.logging_config import configure_logging
from user_registry.main import create_app
from user_registry.repository import UserRepository
from user_registry.settings import LOG_LEVELS, Settings, get_settings
from user_registry.store import JsonUserStore

logger = logging.getLogger("user_registry.cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User registry HTTP service")
    parser.add_argument("--db-path", default=None, help="JSON file holding the users (default: USER_DB_PATH or db.json)")
    parser.add_argument("--host", default=None, help="Bind address (default: USER_REGISTRY_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: USER_REGISTRY_PORT or 8080)")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        key: value
        for key, value in {
            "db_path": args.db_path,
            "host": args.host,
            "port": args.port,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    settings = get_settings()
    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage. Returns the process exit status."""
    args = _parse_args(argv)
    try:
        settings = _resolve_settings(args)
    except ValidationError as e:
        configure_logging()
        logger.critical("Invalid configuration: %s", e)
        return 1
    configure_logging(settings.log_level)

    try:
        repository = UserRepository.from_store(JsonUserStore(settings.db_path))
    except StoreError as e:
        logger.critical("Error loading database: %s", e)
        return 1

    import uvicorn

    app = create_app(repository=repository)
    logger.info("Server starting on port %d...", settings.port)
    # uvicorn exits the process itself if the listen call fails.
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
