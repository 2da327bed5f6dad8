from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_user
from .auth.models import LoginRequest, RegisterRequest, User
from .auth.users import AuthError, authenticate, register
from .cities.ibge import get_city_cache, search_cities
from .cities.models import CityOption
from .geo.models import GEOLOCATION_MESSAGES
from .llm.config import is_image_generation_configured, is_llm_configured
from .llm.groq_client import search_specific_product_prices
from .llm.images import generate_establishment_image
from .llm.models import GeneratedImage, ProductPriceRequest, RealPrice
from .places.config import DEFAULT_PLACES_CONFIG
from .places.models import Category, NearbySearchRequest, SearchRequest, SearchResponse
from .places.search import SearchError, search, search_nearby
from .quiz.engine import QUESTIONS, InvalidAnswers, complete_quiz
from .quiz.models import QuizAnswers, QuizQuestion, QuizResult

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="PreçoFácil API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "precofacil-secret-change-in-production"),
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/config")
def integrations() -> dict:
    return {
        "google_places": DEFAULT_PLACES_CONFIG.google_enabled,
        "real_prices": is_llm_configured(),
        "image_generation": is_image_generation_configured(),
        "cities_cache": get_city_cache().stats(),
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register", status_code=201)
def auth_register(body: RegisterRequest) -> dict:
    try:
        user = register(body.email, body.password, body.name)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"status": "ok", "user": User(**user)}


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    try:
        user = authenticate(body.email, body.password)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc))
    request.session["user"] = user
    return {"status": "ok", "user": User(**user)}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me", response_model=User)
def auth_me(user: dict = Depends(require_user)) -> User:
    return User(**user)


# ── Search endpoints ─────────────────────────────────────────────────────


@app.get("/cities", response_model=list[CityOption])
def cities(q: str = Query(default="")) -> list[CityOption]:
    return search_cities(q)


@app.post("/search", response_model=SearchResponse)
def search_establishments(body: SearchRequest) -> SearchResponse:
    try:
        return search(body.location, body.category)
    except SearchError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@app.post("/search/nearby", response_model=SearchResponse)
def search_establishments_nearby(body: NearbySearchRequest) -> SearchResponse:
    if body.error is not None:
        raise HTTPException(status_code=400, detail=GEOLOCATION_MESSAGES[body.error])
    if body.coordinates is None:
        raise HTTPException(status_code=422, detail="coordinates or error is required")
    try:
        return search_nearby(body.coordinates, body.category)
    except SearchError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@app.post("/prices/product", response_model=list[RealPrice])
def product_prices(
    body: ProductPriceRequest,
    user: dict = Depends(require_user),
) -> list[RealPrice]:
    return search_specific_product_prices(body.product_name, body.store_names, body.city)


# ── Quiz & images ───────────────────────────────────────────────────────


@app.get("/quiz", response_model=list[QuizQuestion])
def quiz_questions() -> list[QuizQuestion]:
    return QUESTIONS


@app.post("/quiz/result", response_model=QuizResult)
def quiz_result(body: QuizAnswers) -> QuizResult:
    try:
        return complete_quiz(body.answers, generate_image=body.generate_image)
    except InvalidAnswers as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@app.get("/images/{category}", response_model=GeneratedImage)
def category_image(category: Category) -> GeneratedImage:
    image = generate_establishment_image(category.value)
    if image is None:
        raise HTTPException(status_code=503, detail="Image generation unavailable")
    return image
