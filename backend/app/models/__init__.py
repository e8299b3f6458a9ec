"""Pydantic models for the Neon Love Test API."""

from app.models.quiz import (
    OPTIONS_PER_QUESTION,
    Gender,
    AgeBand,
    Question,
    QuizResult,
)
from app.models.screens import (
    Screen,
    OnboardingView,
    GenderView,
    AgeView,
    QuizView,
    LoadingView,
    ResultsView,
    ImageResultView,
    ErrorView,
    ScreenView,
)
from app.models.session import (
    GenderRequest,
    AgeRequest,
    AnswerRequest,
    ImagePromptRequest,
    SessionResponse,
)
from app.models.health import HealthStatus

__all__ = [
    # Quiz
    "OPTIONS_PER_QUESTION",
    "Gender",
    "AgeBand",
    "Question",
    "QuizResult",
    # Screens
    "Screen",
    "OnboardingView",
    "GenderView",
    "AgeView",
    "QuizView",
    "LoadingView",
    "ResultsView",
    "ImageResultView",
    "ErrorView",
    "ScreenView",
    # Session
    "GenderRequest",
    "AgeRequest",
    "AnswerRequest",
    "ImagePromptRequest",
    "SessionResponse",
    # Health
    "HealthStatus",
]
