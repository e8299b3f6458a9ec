"""Business logic services for the Neon Love Test API."""

from app.services.gemini import GeminiQuizService, GenerationError
from app.services.quiz_session import (
    QuizSession,
    QuizSessionError,
    InvalidTransition,
    InvalidSelection,
)

__all__ = [
    "GeminiQuizService",
    "GenerationError",
    "QuizSession",
    "QuizSessionError",
    "InvalidTransition",
    "InvalidSelection",
]
