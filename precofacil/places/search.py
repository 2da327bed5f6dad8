from __future__ import annotations

import logging
import random
import re
from urllib.parse import quote_plus

from ..geo.geocoder import get_address_from_cep, get_coordinates_from_city, looks_like_cep
from ..geo.models import Coordinates
from ..pricing.attacher import add_real_products_to_places
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .google_places import search_places_with_google
from .models import Category, Place, SearchResponse, StoreWithProducts
from .osm import search_nearby_places

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
NEARBY_CITY_LABEL = "sua região"

MSG_EMPTY_LOCATION = "Digite um CEP ou cidade"
MSG_INVALID_CEP = "CEP inválido. O CEP deve ter 8 dígitos."
MSG_CEP_NOT_FOUND = "CEP não encontrado. Tente novamente."
MSG_CITY_NOT_FOUND = "Cidade não encontrada. Tente novamente."
MSG_INVALID_CATEGORY = "Categoria inválida"
MSG_NO_RESULTS = "Nenhum estabelecimento encontrado nesta região."

_NUMERIC_INPUT = re.compile(r"^[\d\-\s.]+$")


class SearchError(Exception):
    """User-facing search failure carrying an HTTP status."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def parse_category(raw: str | None) -> str:
    value = (raw or ALL_CATEGORIES).strip()
    if value == ALL_CATEGORIES:
        return value
    try:
        return Category(value).value
    except ValueError:
        raise SearchError(MSG_INVALID_CATEGORY, 422) from None


def resolve_location(location: str) -> tuple[Coordinates, str]:
    """Turn a CEP or ``"Cidade - UF"`` into coordinates and a city name."""
    text = (location or "").strip()
    if not text:
        raise SearchError(MSG_EMPTY_LOCATION, 400)

    if looks_like_cep(text):
        address = get_address_from_cep(text)
        if address is None:
            raise SearchError(MSG_CEP_NOT_FOUND, 404)
        return address.coordinates, address.city

    if _NUMERIC_INPUT.match(text):
        raise SearchError(MSG_INVALID_CEP, 400)

    # "Cidade - UF" or "Cidade - UF - Brasil"
    parts = [part.strip() for part in text.split(" - ")]
    city = parts[0]
    state = parts[1] if len(parts) > 1 else ""
    coordinates = get_coordinates_from_city(city, state or None)
    if coordinates is None:
        raise SearchError(MSG_CITY_NOT_FOUND, 404)
    return coordinates, city


def find_places(
    coordinates: Coordinates,
    category: str,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
    rng: random.Random | None = None,
) -> list[Place]:
    places: list[Place] = []
    if config.google_enabled and category != ALL_CATEGORIES:
        found = search_places_with_google(
            coordinates, category, radius_m=int(config.default_radius_km * 1000), config=config,
        )
        # Google types do not map one-to-one onto categories
        places = [p for p in found if p.category.value == category]
        logger.info("Google Places returned %d results, %d in %s", len(found), len(places), category)

    if not places:
        places = search_nearby_places(coordinates, config.default_radius_km, config=config, rng=rng)
    return places


def store_url(store: StoreWithProducts) -> str:
    """Website first, then Instagram profile, then a Google Maps search."""
    social = store.social_media
    website = (social.website if social else None) or store.website
    if website:
        return website
    if social and social.instagram:
        handle = social.instagram.replace("https://instagram.com/", "").replace("https://www.instagram.com/", "")
        return f"https://instagram.com/{handle.lstrip('@').strip('/')}"
    return f"https://www.google.com/maps/search/?api=1&query={quote_plus(f'{store.name} {store.address}')}"


def best_prices(stores: list[StoreWithProducts]) -> dict[str, float]:
    best: dict[str, float] = {}
    for store in stores:
        for product in store.products:
            current = best.get(product.name)
            if current is None or product.price < current:
                best[product.name] = product.price
    return best


def build_response(
    stores: list[StoreWithProducts],
    coordinates: Coordinates,
    city: str,
    category: str,
) -> SearchResponse:
    if category != ALL_CATEGORIES:
        stores = [s for s in stores if s.category.value == category]
    for store in stores:
        store.store_url = store_url(store)

    return SearchResponse(
        stores=stores,
        coordinates=coordinates,
        city=city,
        has_real_prices=any(p.is_real for s in stores for p in s.products),
        best_prices=best_prices(stores),
        message=None if stores else MSG_NO_RESULTS,
    )


def search(
    location: str,
    category: str = ALL_CATEGORIES,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
    rng: random.Random | None = None,
) -> SearchResponse:
    category = parse_category(category)
    coordinates, city = resolve_location(location)
    logger.info("Searching %s near %s (%.4f, %.4f)", category, city, coordinates.lat, coordinates.lng)

    places = find_places(coordinates, category, config=config, rng=rng)
    stores = add_real_products_to_places(places, city, rng=rng)
    return build_response(stores, coordinates, city, category)


def search_nearby(
    coordinates: Coordinates,
    category: str = ALL_CATEGORIES,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
    rng: random.Random | None = None,
) -> SearchResponse:
    category = parse_category(category)
    places = search_nearby_places(coordinates, config.default_radius_km, config=config, rng=rng)
    stores = add_real_products_to_places(places, NEARBY_CITY_LABEL, rng=rng)
    return build_response(stores, coordinates, NEARBY_CITY_LABEL, category)
