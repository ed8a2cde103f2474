"""Health check endpoint for the BoardFlow API."""

from fastapi import APIRouter

from boardflow import __version__
from boardflow.api.models.health import HealthResponse

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return health status."""
    return HealthResponse(status="healthy", version=__version__)
