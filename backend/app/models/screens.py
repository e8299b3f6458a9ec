"""Per-screen view models returned to the front end."""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from app.models.quiz import AgeBand, Gender, Question, QuizResult


class Screen(str, Enum):
    ONBOARDING = "onboarding"
    GENDER = "gender"
    AGE = "age"
    QUIZ = "quiz"
    LOADING = "loading"
    RESULTS = "results"
    IMAGE_RESULT = "image_result"
    ERROR = "error"


class OnboardingView(BaseModel):
    screen: Literal["onboarding"] = "onboarding"


class GenderView(BaseModel):
    screen: Literal["gender"] = "gender"
    options: List[Gender] = Field(default_factory=lambda: list(Gender))


class AgeView(BaseModel):
    screen: Literal["age"] = "age"
    gender: Gender
    age: Optional[AgeBand] = None
    options: List[AgeBand] = Field(default_factory=lambda: list(AgeBand))
    can_start: bool = False


class QuizView(BaseModel):
    screen: Literal["quiz"] = "quiz"
    index: int
    total: int
    question: Question
    selected: Optional[int] = None
    progress: float


class LoadingView(BaseModel):
    screen: Literal["loading"] = "loading"
    message: str


class ResultsView(BaseModel):
    screen: Literal["results"] = "results"
    result: QuizResult
    show_image_prompt: bool = False
    show_restart: bool = False
    notice: Optional[str] = None


class ImageResultView(BaseModel):
    screen: Literal["image_result"] = "image_result"
    result: QuizResult
    image_url: str


class ErrorView(BaseModel):
    screen: Literal["error"] = "error"
    message: str


ScreenView = Annotated[
    Union[
        OnboardingView,
        GenderView,
        AgeView,
        QuizView,
        LoadingView,
        ResultsView,
        ImageResultView,
        ErrorView,
    ],
    Field(discriminator="screen"),
]
