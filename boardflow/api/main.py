"""FastAPI application entry point for BoardFlow."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from boardflow import __version__
from boardflow.api.middleware.logging_middleware import LoggingMiddleware
from boardflow.api.routes import boards_router, columns_router, health_router
from boardflow.api.startup import configure_logging, initialize_board_services, shutdown
from boardflow.config.board_sync_config import BoardSyncConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = BoardSyncConfig.from_environment()
    configure_logging(config)
    initialize_board_services(config)
    yield
    await shutdown(config)


app = FastAPI(
    title="BoardFlow API",
    description="Board column and workflow alignment",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(health_router)
app.include_router(boards_router)
app.include_router(columns_router)
