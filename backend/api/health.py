"""GET /api/health — liveness check."""
from datetime import datetime, timezone
from fastapi import APIRouter

from config import settings
from models.requests import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        service=settings.SERVICE_NAME,
    )
