"""API routers."""

from boardflow.api.routes.boards import router as boards_router
from boardflow.api.routes.columns import router as columns_router
from boardflow.api.routes.health import router as health_router

__all__ = ["boards_router", "columns_router", "health_router"]
