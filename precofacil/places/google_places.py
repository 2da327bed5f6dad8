"""Client utilities for the Google Places API (optional, key-gated)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from ..geo.distance import calculate_distance
from ..geo.models import Coordinates
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .models import Category, Place

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

_TO_GOOGLE_TYPE: dict[str, str] = {
    Category.mercado.value: "supermarket",
    Category.farmacia.value: "pharmacy",
    Category.lanchonete.value: "restaurant",
    Category.cafeteria.value: "cafe",
    Category.padaria.value: "bakery",
    Category.restaurante.value: "restaurant",
    Category.loja.value: "store",
    "all": "establishment",
}

_FROM_GOOGLE_TYPE: dict[str, Category] = {
    "supermarket": Category.mercado,
    "grocery_or_supermarket": Category.mercado,
    "pharmacy": Category.farmacia,
    "drugstore": Category.farmacia,
    "restaurant": Category.restaurante,
    "cafe": Category.cafeteria,
    "bakery": Category.padaria,
    "food": Category.lanchonete,
    "meal_takeaway": Category.lanchonete,
    "store": Category.loja,
}

_DETAIL_FIELDS = (
    "name,formatted_address,formatted_phone_number,website,rating,user_ratings_total,"
    "opening_hours,price_level,photos,geometry,types"
)


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""


def to_google_type(category: str) -> str:
    return _TO_GOOGLE_TYPE.get(category, "establishment")


def from_google_type(google_type: str) -> Category:
    return _FROM_GOOGLE_TYPE.get(google_type, Category.loja)


def _get(endpoint: str, params: dict[str, Any], config: PlacesConfig) -> dict[str, Any]:
    response = _SESSION.get(
        f"{config.google_base_url}/{endpoint}/json",
        params={**params, "key": config.google_api_key},
        timeout=config.google_timeout,
    )
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("%s failed: status=%s, error_message=%s", endpoint, status, payload.get("error_message"))
        raise GooglePlacesError(payload.get("error_message") or status)
    return payload


def _photo_urls(raw: dict[str, Any], max_width: int, config: PlacesConfig) -> list[str]:
    urls = []
    for photo in raw.get("photos") or []:
        ref = photo.get("photo_reference")
        if ref:
            urls.append(
                f"{config.google_base_url}/photo?maxwidth={max_width}"
                f"&photo_reference={ref}&key={config.google_api_key}"
            )
    return urls


def _to_place(
    raw: dict[str, Any],
    origin: Coordinates,
    fallback_type: str,
    config: PlacesConfig,
    max_photo_width: int = 400,
) -> Place:
    location = raw.get("geometry", {}).get("location", {})
    coords = Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
    types = raw.get("types") or []
    return Place(
        id=str(raw.get("place_id") or ""),
        name=raw.get("name") or "",
        category=from_google_type(types[0] if types else fallback_type),
        distance=calculate_distance(origin, coords),
        address=raw.get("vicinity") or raw.get("formatted_address") or "",
        coordinates=coords,
        rating=raw.get("rating"),
        total_ratings=raw.get("user_ratings_total"),
        open_now=(raw.get("opening_hours") or {}).get("open_now"),
        price_level=raw.get("price_level"),
        photos=_photo_urls(raw, max_photo_width, config),
        website=raw.get("website"),
    )


def search_places_with_google(
    coordinates: Coordinates,
    category: str,
    radius_m: int = 5000,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> list[Place]:
    """Nearby Search by mapped category type. Empty list without an API key."""
    if not config.google_enabled:
        logger.warning("GOOGLE_MAPS_API_KEY is not configured; skipping Google Places search.")
        return []

    google_type = to_google_type(category)
    try:
        payload = _get(
            "nearbysearch",
            {
                "location": f"{coordinates.lat},{coordinates.lng}",
                "radius": radius_m,
                "type": google_type,
            },
            config,
        )
        places = [
            _to_place(raw, coordinates, google_type, config)
            for raw in payload.get("results") or []
        ]
    except Exception:
        logger.error("Google Places nearby search failed", exc_info=True)
        return []

    places.sort(key=lambda p: p.distance)
    return places


def get_place_details(
    place_id: str,
    origin: Coordinates,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> Place | None:
    if not config.google_enabled:
        return None

    try:
        payload = _get("details", {"place_id": place_id, "fields": _DETAIL_FIELDS}, config)
        result = payload.get("result")
        if not result:
            return None
        result.setdefault("place_id", place_id)
        return _to_place(result, origin, "", config, max_photo_width=800)
    except Exception:
        logger.error("Google Places details failed for %s", place_id, exc_info=True)
        return None
