"""Quiz session routes."""

import logging
from typing import Callable
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from app import config
from app.dependencies import SESSIONS, get_quiz_service, get_session
from app.models.session import (
    AgeRequest,
    AnswerRequest,
    GenderRequest,
    ImagePromptRequest,
    SessionResponse,
)
from app.services.gemini import GeminiQuizService
from app.services.quiz_session import (
    InvalidSelection,
    InvalidTransition,
    QuizSession,
)

logger = logging.getLogger("neonlove")

router = APIRouter()


def _respond(session_id: str, session: QuizSession) -> SessionResponse:
    return SessionResponse(session_id=session_id, view=session.view())


def _apply(session_id: str, session: QuizSession, action: Callable[[], object]) -> SessionResponse:
    """Run a session action and map rejected actions to HTTP errors."""
    try:
        action()
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except InvalidSelection as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _respond(session_id, session)


def _evict_oldest(keep: int) -> None:
    """Drop the oldest sessions until at most `keep` remain."""
    while SESSIONS and len(SESSIONS) > keep:
        oldest_id = next(iter(SESSIONS))
        SESSIONS.pop(oldest_id).cancel_pending()
        logger.info("Evicted quiz session %s", oldest_id)


@router.post("", response_model=SessionResponse)
async def create_session(
    service: GeminiQuizService = Depends(get_quiz_service),
) -> SessionResponse:
    """Start a new quiz session on the onboarding screen."""
    session_id = f"quiz-{uuid4()}"
    _evict_oldest(config.max_sessions() - 1)
    SESSIONS[session_id] = QuizSession(
        generator=service,
        feedback_delay=config.answer_feedback_delay_s(),
        image_prompt_delay=config.image_prompt_delay_s(),
    )
    logger.info("Created quiz session %s", session_id)
    return _respond(session_id, SESSIONS[session_id])


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session_view(session_id: str) -> SessionResponse:
    return _respond(session_id, get_session(session_id))


@router.post("/{session_id}/start", response_model=SessionResponse)
async def start(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    return _apply(session_id, session, session.start)


@router.post("/{session_id}/gender", response_model=SessionResponse)
async def choose_gender(session_id: str, payload: GenderRequest) -> SessionResponse:
    session = get_session(session_id)
    return _apply(session_id, session, lambda: session.choose_gender(payload.gender))


@router.post("/{session_id}/age", response_model=SessionResponse)
async def choose_age(session_id: str, payload: AgeRequest) -> SessionResponse:
    session = get_session(session_id)
    return _apply(session_id, session, lambda: session.choose_age(payload.age))


@router.post("/{session_id}/quiz", response_model=SessionResponse)
async def start_quiz(session_id: str) -> SessionResponse:
    """Confirm demographics and begin generating questions."""
    session = get_session(session_id)
    return _apply(session_id, session, session.start_quiz)


@router.post("/{session_id}/answers", response_model=SessionResponse)
async def select_answer(session_id: str, payload: AnswerRequest) -> SessionResponse:
    session = get_session(session_id)
    return _apply(session_id, session, lambda: session.select_answer(payload.option))


@router.post("/{session_id}/image-prompt", response_model=SessionResponse)
async def answer_image_prompt(session_id: str, payload: ImagePromptRequest) -> SessionResponse:
    session = get_session(session_id)
    return _apply(session_id, session, lambda: session.answer_image_prompt(payload.accept))


@router.post("/{session_id}/restart", response_model=SessionResponse)
async def restart(session_id: str) -> SessionResponse:
    session = get_session(session_id)
    session.restart()
    return _respond(session_id, session)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str) -> None:
    session = get_session(session_id)
    session.cancel_pending()
    SESSIONS.pop(session_id, None)
