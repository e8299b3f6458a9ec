"""Session API request/response models."""

from pydantic import BaseModel, Field

from app.models.quiz import AgeBand, Gender
from app.models.screens import ScreenView


class GenderRequest(BaseModel):
    gender: Gender


class AgeRequest(BaseModel):
    age: AgeBand


class AnswerRequest(BaseModel):
    option: int = Field(ge=0)


class ImagePromptRequest(BaseModel):
    accept: bool


class SessionResponse(BaseModel):
    session_id: str
    view: ScreenView
