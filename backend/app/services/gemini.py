"""Gemini-backed question, analysis and portrait generation."""

from __future__ import annotations

import base64
import logging
from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types
from pydantic import TypeAdapter, ValidationError

from app import config
from app.models.quiz import AgeBand, Gender, Question, QuizResult
from app.services.prompts import (
    build_analysis_prompt,
    build_image_prompt,
    build_question_prompt,
)

logger = logging.getLogger("neonlove")

_QUESTION_LIST = TypeAdapter(List[Question])

QUESTION_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "question": types.Schema(type=types.Type.STRING),
            "options": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING),
            ),
        },
        required=["question", "options"],
    ),
)

RESULT_FIELDS = [
    "title",
    "strengths",
    "weaknesses",
    "mainWeakness",
    "summary",
    "score",
    "emoji",
    "animal",
]

RESULT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        name: types.Schema(
            type=types.Type.INTEGER if name == "score" else types.Type.STRING
        )
        for name in RESULT_FIELDS
    },
    required=RESULT_FIELDS,
)


class GenerationError(RuntimeError):
    """The generative service failed or returned an unusable payload."""


def _extract_json(raw_text: str, opener: str, closer: str) -> Optional[str]:
    """Extract a JSON array/object from potentially formatted AI response."""
    cleaned = raw_text.strip()
    if not cleaned:
        return None
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        cleaned = cleaned.removeprefix("json").strip()
    json_start = cleaned.find(opener)
    json_end = cleaned.rfind(closer)
    if json_start == -1 or json_end == -1 or json_end <= json_start:
        return None
    return cleaned[json_start : json_end + 1]


def parse_questions(raw_text: str) -> List[Question]:
    """Validate a question-generation payload."""
    json_text = _extract_json(raw_text, "[", "]")
    if not json_text:
        raise GenerationError("Question payload is not a JSON array")
    try:
        questions = _QUESTION_LIST.validate_json(json_text)
    except ValidationError as exc:
        raise GenerationError(f"Question payload failed validation: {exc}") from exc
    if not questions:
        raise GenerationError("Question payload is empty")
    return questions


def parse_result(raw_text: str) -> QuizResult:
    """Validate an analysis payload."""
    json_text = _extract_json(raw_text, "{", "}")
    if not json_text:
        raise GenerationError("Analysis payload is not a JSON object")
    try:
        return QuizResult.model_validate_json(json_text)
    except ValidationError as exc:
        raise GenerationError(f"Analysis payload failed validation: {exc}") from exc


def to_data_uri(image_bytes: bytes, mime_type: str = "image/png") -> str:
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class GeminiQuizService:
    """Thin async binding over the google-genai client."""

    def __init__(
        self,
        client: Optional[Any],
        text_model: str = "gemini-2.5-flash",
        image_model: str = "imagen-4.0-generate-001",
        question_count: int = 10,
    ) -> None:
        self.client = client
        self.text_model = text_model
        self.image_model = image_model
        self.question_count = question_count

    @classmethod
    def from_env(cls) -> "GeminiQuizService":
        api_key = config.gemini_api_key()
        client = None
        if api_key:
            client = genai.Client(api_key=api_key)
        else:
            logger.error("GEMINI_API_KEY missing; generation calls will fail")
        return cls(
            client=client,
            text_model=config.text_model(),
            image_model=config.image_model(),
            question_count=config.question_count(),
        )

    @property
    def configured(self) -> bool:
        return self.client is not None

    def _require_client(self) -> Any:
        if self.client is None:
            raise GenerationError("GEMINI_API_KEY is not set")
        return self.client

    async def _generate_json(self, prompt: str, schema: types.Schema) -> str:
        client = self._require_client()
        response = await client.aio.models.generate_content(
            model=self.text_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        raw_text = (getattr(response, "text", None) or "").strip()
        if not raw_text:
            raise GenerationError("Gemini returned an empty response")
        return raw_text

    async def generate_questions(self, gender: Gender, age: AgeBand) -> List[Question]:
        prompt = build_question_prompt(gender, age, self.question_count)
        raw_text = await self._generate_json(prompt, QUESTION_SCHEMA)
        try:
            return parse_questions(raw_text)
        except GenerationError:
            logger.warning("Gemini questions malformed for %s/%s", gender.value, age.value)
            raise

    async def analyze_answers(
        self,
        gender: Gender,
        age: AgeBand,
        questions: Sequence[Question],
        answers: Sequence[Optional[int]],
    ) -> QuizResult:
        prompt = build_analysis_prompt(gender, age, questions, answers)
        raw_text = await self._generate_json(prompt, RESULT_SCHEMA)
        try:
            return parse_result(raw_text)
        except GenerationError:
            logger.warning("Gemini analysis malformed for %s/%s", gender.value, age.value)
            raise

    async def generate_image(self, result: QuizResult, gender: Gender, age: AgeBand) -> str:
        """Render the look-alike animal portrait and return it as a data URI."""
        client = self._require_client()
        response = await client.aio.models.generate_images(
            model=self.image_model,
            prompt=build_image_prompt(result, gender, age),
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/png",
                aspect_ratio="1:1",
            ),
        )
        generated = getattr(response, "generated_images", None) or []
        image = getattr(generated[0], "image", None) if generated else None
        image_bytes = getattr(image, "image_bytes", None) if image else None
        if not image_bytes:
            raise GenerationError("Gemini returned no image")
        return to_data_uri(image_bytes)
