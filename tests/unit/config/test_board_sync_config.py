"""Unit tests for BoardSyncConfig."""

import pytest

from boardflow.config.board_sync_config import (
    DEFAULT_BOARD_SYNC_CONFIG,
    TEST_BOARD_SYNC_CONFIG,
    BoardSyncConfig,
)

_ENV_VARS = (
    "BOARDFLOW_PRESERVE_WIP_LIMITS",
    "BOARDFLOW_REMOVE_ORPHANS",
    "BOARDFLOW_LOCK_TIMEOUT_SECONDS",
    "BOARDFLOW_REPOSITORY_TIMEOUT_SECONDS",
    "BOARDFLOW_ENVIRONMENT",
    "BOARDFLOW_BACKEND",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for default values."""

    def test_default_config(self) -> None:
        assert DEFAULT_BOARD_SYNC_CONFIG.preserve_wip_limits is True
        assert DEFAULT_BOARD_SYNC_CONFIG.remove_orphans is False
        assert DEFAULT_BOARD_SYNC_CONFIG.lock_timeout_seconds == 0.0
        assert DEFAULT_BOARD_SYNC_CONFIG.repository_timeout_seconds == 10.0
        assert DEFAULT_BOARD_SYNC_CONFIG.environment == "production"
        assert DEFAULT_BOARD_SYNC_CONFIG.backend == "memory"

    def test_test_config_uses_console_logs(self) -> None:
        assert TEST_BOARD_SYNC_CONFIG.environment == "development"
        assert TEST_BOARD_SYNC_CONFIG.repository_timeout_seconds == 1.0

    def test_from_empty_environment_matches_defaults(self) -> None:
        assert BoardSyncConfig.from_environment() == DEFAULT_BOARD_SYNC_CONFIG


class TestFromEnvironment:
    """Tests for environment overrides."""

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOARDFLOW_PRESERVE_WIP_LIMITS", "no")
        monkeypatch.setenv("BOARDFLOW_REMOVE_ORPHANS", "TRUE")
        monkeypatch.setenv("BOARDFLOW_LOCK_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("BOARDFLOW_REPOSITORY_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("BOARDFLOW_ENVIRONMENT", "Development")
        monkeypatch.setenv("BOARDFLOW_BACKEND", "postgres")

        config = BoardSyncConfig.from_environment()

        assert config == BoardSyncConfig(
            preserve_wip_limits=False,
            remove_orphans=True,
            lock_timeout_seconds=2.5,
            repository_timeout_seconds=30.0,
            environment="development",
            backend="postgres",
        )

    def test_unparseable_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOARDFLOW_REMOVE_ORPHANS", "maybe")
        monkeypatch.setenv("BOARDFLOW_LOCK_TIMEOUT_SECONDS", "soon")

        config = BoardSyncConfig.from_environment()

        assert config.remove_orphans is False
        assert config.lock_timeout_seconds == 0.0

    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOARDFLOW_BACKEND", "sqlite")

        with pytest.raises(ValueError, match="backend"):
            BoardSyncConfig.from_environment()


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lock_timeout_seconds": -1.0},
            {"repository_timeout_seconds": 0.0},
            {"environment": "staging"},
            {"backend": "redis"},
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            BoardSyncConfig(**kwargs)
