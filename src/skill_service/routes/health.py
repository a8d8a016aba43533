"""Health check endpoint."""

from fastapi import APIRouter

from ..config import settings
from ..models.protocol import PROTOCOL_VERSION

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Return service health status and the skill protocol version served."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
        "protocol_version": PROTOCOL_VERSION,
    }
