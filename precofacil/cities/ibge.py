from __future__ import annotations

import logging
import unicodedata
from typing import Any

import pandas as pd
import requests

from .cache import CityCache
from .models import CityOption

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

IBGE_MUNICIPALITIES_URL = "https://servicodados.ibge.gov.br/api/v1/localidades/municipios"
MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 10
_TIMEOUT = 15


def normalize(text: str) -> str:
    """Lowercase and strip accents: ``"São Paulo"`` -> ``"sao paulo"``."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _state_of(raw: dict[str, Any]) -> str:
    try:
        return raw["microrregiao"]["mesorregiao"]["UF"]["sigla"] or "BR"
    except (KeyError, TypeError):
        return "BR"


def municipalities_to_frame(data: list[dict[str, Any]]) -> pd.DataFrame:
    rows = [
        {"id": str(item["id"]), "name": item["nome"], "state": _state_of(item)}
        for item in data
        if item.get("id") is not None and item.get("nome")
    ]
    df = pd.DataFrame(rows, columns=["id", "name", "state"])
    df["display_name"] = df["name"] + " - " + df["state"]
    df["name_normalized"] = df["name"].apply(normalize)
    return df


def fetch_municipalities() -> pd.DataFrame:
    response = _SESSION.get(IBGE_MUNICIPALITIES_URL, params={"orderBy": "nome"}, timeout=_TIMEOUT)
    response.raise_for_status()
    df = municipalities_to_frame(response.json())
    logger.info("Loaded %d municipalities from IBGE", len(df))
    return df


_cache = CityCache(fetch_municipalities)


def get_city_cache() -> CityCache:
    return _cache


def search_cities(query: str, cache: CityCache | None = None) -> list[CityOption]:
    """Accent-insensitive substring match over municipality names, max 10 hits."""
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    cache = cache or _cache
    try:
        df = cache.get()
    except Exception:
        logger.error("Failed to load municipalities from IBGE", exc_info=True)
        return []

    if df.empty:
        return []

    needle = normalize(query.strip())
    matches = df[df["name_normalized"].str.contains(needle, regex=False, na=False)]
    return [
        CityOption(id=row.id, name=row.name, state=row.state, display_name=row.display_name)
        for row in matches.head(MAX_SUGGESTIONS).itertuples(index=False)
    ]
