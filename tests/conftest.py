import json
import random
from types import SimpleNamespace
from typing import List, Optional

import pytest

from app.models.quiz import Question, QuizResult
from app.services.quiz_session import QuizSession

SAMPLE_RESULT = {
    "title": "츤데레 연애 장인",
    "strengths": "눈빛 하나로 분위기를 바꾸는 능력자!",
    "weaknesses": "그렇게 재기만 해서 연애를 할 수 있겠어요?",
    "mainWeakness": "밀당 과다",
    "summary": "전체적으로 매력 넘치지만 타이밍이 아쉬운 스타일.",
    "score": 78,
    "emoji": "😎",
    "animal": "고양이",
}

FAKE_IMAGE_URL = "data:image/png;base64,iVBORw0KGgo="


def make_questions(count: int = 10) -> List[Question]:
    return [
        Question(
            text=f"질문 {i + 1}번: 데이트 약속에 늦는 연인을 보면?",
            options=[f"Q{i + 1}-선택{j}" for j in range(5)],
        )
        for i in range(count)
    ]


def questions_payload(count: int = 10) -> str:
    return json.dumps(
        [
            {"question": q.text, "options": list(q.options)}
            for q in make_questions(count)
        ],
        ensure_ascii=False,
    )


def text_response(text: str) -> SimpleNamespace:
    return SimpleNamespace(text=text)


class FakeGenerator:
    """In-memory stand-in for the Gemini binding."""

    def __init__(
        self,
        questions: Optional[List[Question]] = None,
        result: Optional[QuizResult] = None,
        image_url: str = FAKE_IMAGE_URL,
        question_error: Optional[Exception] = None,
        analysis_error: Optional[Exception] = None,
        image_error: Optional[Exception] = None,
    ):
        self.questions = questions if questions is not None else make_questions()
        self.result = result or QuizResult.model_validate(SAMPLE_RESULT)
        self.image_url = image_url
        self.question_error = question_error
        self.analysis_error = analysis_error
        self.image_error = image_error
        self.question_calls = []
        self.analysis_calls = []
        self.image_calls = []

    async def generate_questions(self, gender, age):
        self.question_calls.append((gender, age))
        if self.question_error:
            raise self.question_error
        return self.questions

    async def analyze_answers(self, gender, age, questions, answers):
        self.analysis_calls.append((gender, age, list(questions), list(answers)))
        if self.analysis_error:
            raise self.analysis_error
        return self.result

    async def generate_image(self, result, gender, age):
        self.image_calls.append((result, gender, age))
        if self.image_error:
            raise self.image_error
        return self.image_url


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def make_session():
    def _make(generator):
        return QuizSession(
            generator=generator,
            feedback_delay=0,
            image_prompt_delay=0,
            rng=random.Random(7),
        )

    return _make


@pytest.fixture
def session(generator, make_session):
    return make_session(generator)
