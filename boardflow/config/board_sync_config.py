"""Board sync configuration.

Defaults for column regeneration and sync, and the timeouts that
bound repository calls, with environment variable overrides.

Environment Variables:
- BOARDFLOW_PRESERVE_WIP_LIMITS: Carry WIP limits over on regenerate (default: true)
- BOARDFLOW_REMOVE_ORPHANS: Remove orphaned columns on sync (default: false)
- BOARDFLOW_LOCK_TIMEOUT_SECONDS: Wait for a busy board before failing (default: 0.0)
- BOARDFLOW_REPOSITORY_TIMEOUT_SECONDS: Upper bound per operation (default: 10.0)
- BOARDFLOW_ENVIRONMENT: production or development log output (default: production)
- BOARDFLOW_BACKEND: memory or postgres repositories (default: memory)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

VALID_ENVIRONMENTS: frozenset[str] = frozenset({"production", "development"})
VALID_BACKENDS: frozenset[str] = frozenset({"memory", "postgres"})

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Unrecognized values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower()


@dataclass(frozen=True)
class BoardSyncConfig:
    """Configuration for column regeneration and sync.

    Attributes:
        preserve_wip_limits: Default for regenerate's preserve_wip_limits.
        remove_orphans: Default for sync's remove_orphans.
        lock_timeout_seconds: How long a second regenerate/sync for the same
            board waits for the first. 0 fails immediately.
        repository_timeout_seconds: Upper bound for one regenerate/sync
            (all of its repository calls).
        environment: 'production' (JSON logs) or 'development' (console).
        backend: 'memory' (in-process stubs) or 'postgres'.
    """

    preserve_wip_limits: bool = True
    remove_orphans: bool = False
    lock_timeout_seconds: float = 0.0
    repository_timeout_seconds: float = 10.0
    environment: str = "production"
    backend: str = "memory"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.lock_timeout_seconds < 0:
            raise ValueError(
                f"lock_timeout_seconds must be non-negative, got {self.lock_timeout_seconds}"
            )
        if self.repository_timeout_seconds <= 0:
            raise ValueError(
                "repository_timeout_seconds must be positive, "
                f"got {self.repository_timeout_seconds}"
            )
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        if self.backend not in VALID_BACKENDS:
            raise ValueError(
                f"backend must be one of {sorted(VALID_BACKENDS)}, got {self.backend!r}"
            )

    @classmethod
    def from_environment(cls) -> BoardSyncConfig:
        """Create config from environment variables with defaults."""
        return cls(
            preserve_wip_limits=_get_bool_env("BOARDFLOW_PRESERVE_WIP_LIMITS", True),
            remove_orphans=_get_bool_env("BOARDFLOW_REMOVE_ORPHANS", False),
            lock_timeout_seconds=_get_float_env("BOARDFLOW_LOCK_TIMEOUT_SECONDS", 0.0),
            repository_timeout_seconds=_get_float_env(
                "BOARDFLOW_REPOSITORY_TIMEOUT_SECONDS", 10.0
            ),
            environment=_get_str_env("BOARDFLOW_ENVIRONMENT", "production"),
            backend=_get_str_env("BOARDFLOW_BACKEND", "memory"),
        )


# Default production config
DEFAULT_BOARD_SYNC_CONFIG = BoardSyncConfig()

# Testing config with short timeouts and console logs
TEST_BOARD_SYNC_CONFIG = BoardSyncConfig(
    lock_timeout_seconds=0.0,
    repository_timeout_seconds=1.0,
    environment="development",
)
