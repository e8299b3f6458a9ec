"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.dependencies import SESSIONS, get_quiz_service
from app.models.health import HealthStatus
from app.services.gemini import GeminiQuizService

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
def health_check(
    service: GeminiQuizService = Depends(get_quiz_service),
) -> HealthStatus:
    """Check API health and generative-service configuration."""
    return HealthStatus(
        time=datetime.now(timezone.utc),
        gemini_configured=service.configured,
        text_model=service.text_model,
        image_model=service.image_model,
        active_sessions=len(SESSIONS),
    )
