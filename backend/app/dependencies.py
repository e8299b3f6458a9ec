"""Shared dependencies and utilities."""

from functools import lru_cache
from typing import Dict

from fastapi import HTTPException

from app.services.gemini import GeminiQuizService
from app.services.quiz_session import QuizSession

# In-memory storage for quiz sessions
SESSIONS: Dict[str, QuizSession] = {}


@lru_cache(maxsize=1)
def get_quiz_service() -> GeminiQuizService:
    """Get the process-wide Gemini binding."""
    return GeminiQuizService.from_env()


def get_session(session_id: str) -> QuizSession:
    """Look up a quiz session by path id."""
    session = SESSIONS.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Quiz session not found")
    return session
