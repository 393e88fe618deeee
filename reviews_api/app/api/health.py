"""
Liveness endpoint, mounted outside the versioned API at ``/health``.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from reviews_api.app.schemas.review import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(request: Request) -> HealthResponse:
    """Report that the process is up.  Does not touch the data files."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=request.app.version,
    )
