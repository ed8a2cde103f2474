"""Logging setup run once at service startup.

The API lifespan calls configure_structlog() with the configured
environment before any board service is built, so every structlog
logger in boardflow (services, repositories, middleware) renders with
the same processors: JSON in production, console output otherwise.
"""

from __future__ import annotations

from boardflow.infrastructure.observability import configure_structlog as _configure_structlog


def configure_structlog(environment: str) -> None:
    """Configure structlog for the given environment."""
    _configure_structlog(environment=environment)


__all__ = ["configure_structlog"]
