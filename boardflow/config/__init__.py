"""Configuration module for BoardFlow.

Available Configurations:
- BoardSyncConfig: Regeneration/sync defaults, timeouts, and wiring
"""

from boardflow.config.board_sync_config import (
    DEFAULT_BOARD_SYNC_CONFIG,
    TEST_BOARD_SYNC_CONFIG,
    BoardSyncConfig,
)

__all__ = [
    "BoardSyncConfig",
    "DEFAULT_BOARD_SYNC_CONFIG",
    "TEST_BOARD_SYNC_CONFIG",
]
