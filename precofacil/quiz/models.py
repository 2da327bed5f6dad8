from __future__ import annotations

from pydantic import BaseModel, Field

from ..places.models import Category


class QuizOption(BaseModel):
    text: str
    value: str


class QuizQuestion(BaseModel):
    id: int
    question: str
    options: list[QuizOption]


class QuizResult(BaseModel):
    type: Category
    name: str
    description: str
    image_url: str | None = None


class QuizAnswers(BaseModel):
    answers: list[str] = Field(..., min_length=1)
    generate_image: bool = False
