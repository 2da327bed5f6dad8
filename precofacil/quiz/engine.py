from __future__ import annotations

import logging
from typing import Callable

from ..llm.images import generate_establishment_image
from ..llm.models import GeneratedImage
from ..places.models import Category
from .models import QuizOption, QuizQuestion, QuizResult

logger = logging.getLogger(__name__)

QUESTIONS: list[QuizQuestion] = [
    QuizQuestion(id=1, question="O que você está procurando?", options=[
        QuizOption(text="Alimentos e produtos do dia a dia", value="food"),
        QuizOption(text="Medicamentos e produtos de saúde", value="health"),
        QuizOption(text="Comida pronta ou lanches", value="meal"),
        QuizOption(text="Produtos variados", value="general"),
    ]),
    QuizQuestion(id=2, question="Qual é a sua prioridade?", options=[
        QuizOption(text="Variedade de produtos", value="variety"),
        QuizOption(text="Atendimento especializado", value="specialized"),
        QuizOption(text="Rapidez e conveniência", value="quick"),
        QuizOption(text="Preço baixo", value="price"),
    ]),
    QuizQuestion(id=3, question="Que tipo de ambiente você prefere?", options=[
        QuizOption(text="Grande e completo", value="large"),
        QuizOption(text="Profissional e limpo", value="professional"),
        QuizOption(text="Aconchegante e casual", value="cozy"),
        QuizOption(text="Simples e prático", value="simple"),
    ]),
]

RESULTS: dict[Category, QuizResult] = {
    Category.mercado: QuizResult(
        type=Category.mercado,
        name="Mercado/Supermercado",
        description="Grande variedade de alimentos, bebidas, produtos de limpeza e itens do dia a dia.",
    ),
    Category.farmacia: QuizResult(
        type=Category.farmacia,
        name="Farmácia/Drogaria",
        description="Medicamentos, produtos de saúde, higiene pessoal e bem-estar.",
    ),
    Category.lanchonete: QuizResult(
        type=Category.lanchonete,
        name="Lanchonete/Fast Food",
        description="Refeições rápidas, lanches, salgados e bebidas para consumo imediato.",
    ),
    Category.cafeteria: QuizResult(
        type=Category.cafeteria,
        name="Cafeteria/Café",
        description="Café, bebidas quentes, doces e ambiente aconchegante.",
    ),
    Category.padaria: QuizResult(
        type=Category.padaria,
        name="Padaria/Confeitaria",
        description="Pães, bolos, doces e produtos de confeitaria feitos no dia.",
    ),
    Category.restaurante: QuizResult(
        type=Category.restaurante,
        name="Restaurante",
        description="Refeições completas em ambiente mais formal.",
    ),
}

DEFAULT_RESULT = Category.mercado

Predicate = Callable[[set[str]], bool]

# Evaluated top to bottom, first match wins.
RULES: list[tuple[Predicate, Category]] = [
    (lambda a: "food" in a and ("variety" in a or "price" in a), Category.mercado),
    (lambda a: "health" in a, Category.farmacia),
    (lambda a: "meal" in a and "cozy" in a, Category.cafeteria),
    (lambda a: "meal" in a and "quick" in a, Category.lanchonete),
    (lambda a: "food" in a and "quick" in a, Category.padaria),
    (lambda a: "meal" in a, Category.restaurante),
]


class InvalidAnswers(ValueError):
    """Raised when answers do not match the questionnaire."""


def validate_answers(answers: list[str]) -> None:
    if len(answers) != len(QUESTIONS):
        raise InvalidAnswers(f"Expected {len(QUESTIONS)} answers, got {len(answers)}")
    for question, answer in zip(QUESTIONS, answers):
        allowed = {o.value for o in question.options}
        if answer not in allowed:
            raise InvalidAnswers(f"Invalid answer {answer!r} for question {question.id}")


def determine_category(answers: list[str]) -> Category:
    tokens = set(answers)
    for predicate, category in RULES:
        if predicate(tokens):
            return category
    return DEFAULT_RESULT


def complete_quiz(
    answers: list[str],
    generate_image: bool = False,
    image_generator: Callable[[str], GeneratedImage | None] = generate_establishment_image,
) -> QuizResult:
    """Validate answers, pick the result and optionally attach an illustration.

    Image failures never block the result; ``image_url`` is left empty.
    """
    validate_answers(answers)
    result = RESULTS[determine_category(answers)].model_copy()

    if generate_image:
        try:
            image = image_generator(result.type.value)
        except Exception:
            logger.warning("Image generation failed for %s", result.type.value, exc_info=True)
            image = None
        if image:
            result.image_url = image.url

    return result
