"""Health check Pydantic models."""

import sys
from datetime import datetime

from google import genai
from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    status: str = Field(default="ok")
    time: datetime
    gemini_configured: bool = Field(default=False)
    text_model: str
    image_model: str
    active_sessions: int = 0
    python: str = Field(default_factory=lambda: sys.version.split()[0])
    google_genai: str = Field(
        default_factory=lambda: getattr(genai, "__version__", "unknown")
    )
