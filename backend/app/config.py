"""Environment-backed settings for the quiz backend."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:4173",
]


def _float_env(name: str, default: float) -> float:
    try:
        value = float(os.environ.get(name, str(default)))
    except ValueError:
        return default
    return value if value >= 0 else default


def _int_env(name: str, default: int) -> int:
    try:
        value = int(os.environ.get(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def gemini_api_key() -> Optional[str]:
    return os.getenv("GEMINI_API_KEY") or None


def text_model() -> str:
    return os.environ.get("GEMINI_TEXT_MODEL", "gemini-2.5-flash")


def image_model() -> str:
    return os.environ.get("GEMINI_IMAGE_MODEL", "imagen-4.0-generate-001")


def question_count() -> int:
    return _int_env("QUIZ_QUESTION_COUNT", 10)


def answer_feedback_delay_s() -> float:
    """Pause between recording an answer and moving on."""
    return _float_env("QUIZ_FEEDBACK_DELAY_S", 0.4)


def image_prompt_delay_s() -> float:
    """Dwell time on the results screen before the image offer appears."""
    return _float_env("QUIZ_IMAGE_PROMPT_DELAY_S", 10.0)


def cors_origins() -> List[str]:
    raw = os.environ.get("CORS_ORIGINS", "")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def log_level() -> str:
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def max_sessions() -> int:
    return _int_env("QUIZ_MAX_SESSIONS", 1000)
