"""Quiz domain Pydantic models."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

OPTIONS_PER_QUESTION = 5


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @property
    def label(self) -> str:
        return "남성" if self is Gender.MALE else "여성"


class AgeBand(str, Enum):
    TEENS = "10대"
    TWENTIES = "20대"
    THIRTIES = "30대"
    FORTIES = "40대"
    FIFTIES = "50대"
    SIXTIES_PLUS = "60대 이상"

    @property
    def lower_bound(self) -> int:
        return int(self.value[:2])


class Question(BaseModel):
    """A generated multiple-choice question."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="question", min_length=1)
    options: List[str] = Field(
        min_length=OPTIONS_PER_QUESTION, max_length=OPTIONS_PER_QUESTION
    )

    @field_validator("options")
    @classmethod
    def _options_not_blank(cls, value: List[str]) -> List[str]:
        if any(not option.strip() for option in value):
            raise ValueError("options must be non-empty strings")
        return value


class QuizResult(BaseModel):
    """Structured personality analysis returned by the analysis call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    strengths: str
    weaknesses: str
    main_weakness: str = Field(alias="mainWeakness")
    summary: str
    score: int = Field(ge=0, le=100)
    emoji: str
    animal: str = Field(min_length=1)
