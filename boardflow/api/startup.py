"""Startup hooks for the BoardFlow API.

1. Configure structured logging
2. Build the board service graph for the configured backend

Usage in FastAPI (see boardflow.api.main):
    configure_logging(config)
    initialize_board_services(config)
"""

from __future__ import annotations

from structlog import get_logger

from boardflow.api.dependencies.board import set_board_services
from boardflow.bootstrap.board_services import BoardServices, build_board_services
from boardflow.bootstrap.database import close_database_engine
from boardflow.bootstrap.logging import configure_structlog
from boardflow.config.board_sync_config import BoardSyncConfig

logger = get_logger()


def configure_logging(config: BoardSyncConfig) -> None:
    """Configure structlog for config.environment.

    Should be called first in the startup sequence, before any logging occurs.
    """
    configure_structlog(environment=config.environment)
    logger.bind(component="startup_logging").info(
        "structured_logging_configured", environment=config.environment
    )


def initialize_board_services(config: BoardSyncConfig) -> BoardServices:
    """Build the board services and register them for dependency injection."""
    services = build_board_services(config)
    set_board_services(services)
    logger.bind(component="startup").info(
        "board_services_initialized",
        backend=config.backend,
        lock_timeout_seconds=config.lock_timeout_seconds,
        repository_timeout_seconds=config.repository_timeout_seconds,
    )
    return services


async def shutdown(config: BoardSyncConfig) -> None:
    """Release resources held by the service graph."""
    set_board_services(None)
    if config.backend == "postgres":
        await close_database_engine()
    logger.bind(component="startup").info("board_services_shutdown")
