"""Unit tests for API startup and shutdown hooks."""

from unittest.mock import AsyncMock, patch

import pytest

from boardflow.api.dependencies.board import get_board_services, set_board_services
from boardflow.api.startup import initialize_board_services, shutdown
from boardflow.config.board_sync_config import BoardSyncConfig
from boardflow.infrastructure.adapters.persistence import PostgresBoardColumnRepository
from boardflow.infrastructure.stubs import BoardColumnRepositoryStub


@pytest.fixture(autouse=True)
def reset_services() -> None:
    set_board_services(None)


class TestInitializeBoardServices:
    """Tests for initialize_board_services."""

    def test_memory_backend_uses_stubs(self) -> None:
        services = initialize_board_services(BoardSyncConfig(backend="memory"))

        assert get_board_services() is services
        assert isinstance(services.columns._columns, BoardColumnRepositoryStub)

    def test_postgres_backend_uses_adapters(self) -> None:
        with patch("boardflow.bootstrap.board_services.get_session_factory") as factory:
            services = initialize_board_services(BoardSyncConfig(backend="postgres"))

        factory.assert_called_once()
        assert isinstance(services.columns._columns, PostgresBoardColumnRepository)

    def test_services_share_one_guard(self) -> None:
        services = initialize_board_services(BoardSyncConfig())

        assert services.sync._guard is services.columns._guard

    def test_uninitialized_services_raise(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            get_board_services()


class TestShutdown:
    """Tests for shutdown."""

    @pytest.mark.asyncio
    async def test_memory_shutdown_clears_services(self) -> None:
        initialize_board_services(BoardSyncConfig())

        await shutdown(BoardSyncConfig())

        with pytest.raises(RuntimeError):
            get_board_services()

    @pytest.mark.asyncio
    async def test_postgres_shutdown_disposes_engine(self) -> None:
        with patch(
            "boardflow.api.startup.close_database_engine", new_callable=AsyncMock
        ) as close:
            await shutdown(BoardSyncConfig(backend="postgres"))

        close.assert_awaited_once()
