"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: str


@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with the current UTC time in ISO-8601.
    """
    return HealthResponse(
        status="UP",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
