"""Nearby establishment lookup through the Overpass API (OpenStreetMap)."""

from __future__ import annotations

import logging
import random
from typing import Any

import requests

from ..geo.distance import calculate_distance
from ..geo.models import Coordinates
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .models import Category, Place

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

# Order matters: the first category listing a tag wins.
CATEGORY_TAGS: dict[Category, list[str]] = {
    Category.mercado: ["supermarket", "convenience", "grocery"],
    Category.farmacia: ["pharmacy", "chemist"],
    Category.lanchonete: ["fast_food", "restaurant"],
    Category.cafeteria: ["cafe", "coffee_shop"],
    Category.padaria: ["bakery"],
    Category.restaurante: ["restaurant"],
}

_MOCK_PLACES: list[tuple[str, Category, float]] = [
    ("Supermercado Economia", Category.mercado, 0.5),
    ("Farmácia Saúde+", Category.farmacia, 0.8),
    ("Lanchonete Sabor & Cia", Category.lanchonete, 1.2),
    ("Mercado Preço Bom", Category.mercado, 1.5),
    ("Café Aroma", Category.cafeteria, 0.3),
    ("Padaria Pão Quente", Category.padaria, 0.6),
    ("Farmácia Popular", Category.farmacia, 1.0),
    ("Restaurante Bom Sabor", Category.restaurante, 0.9),
]

NO_ADDRESS = "Endereço não disponível"


class OverpassError(RuntimeError):
    """Raised when Overpass returns an unusable response."""


def all_tags() -> list[str]:
    seen: list[str] = []
    for tags in CATEGORY_TAGS.values():
        for tag in tags:
            if tag not in seen:
                seen.append(tag)
    return seen


def category_from_tags(tags: dict[str, Any]) -> Category:
    shop = tags.get("shop")
    amenity = tags.get("amenity")
    for category, tag_list in CATEGORY_TAGS.items():
        if shop in tag_list or amenity in tag_list:
            return category
    return Category.outros


def format_address(tags: dict[str, Any]) -> str:
    keys = ("addr:street", "addr:housenumber", "addr:neighbourhood", "addr:city")
    parts = [str(tags[k]) for k in keys if tags.get(k)]
    return ", ".join(parts) if parts else NO_ADDRESS


def build_overpass_query(coordinates: Coordinates, radius_km: float) -> str:
    radius_m = int(radius_km * 1000)
    around = f"(around:{radius_m},{coordinates.lat},{coordinates.lng});"
    clauses = []
    for key in ("shop", "amenity"):
        for tag in all_tags():
            clauses.append(f'node["{key}"="{tag}"]{around}')
    body = "\n  ".join(clauses)
    return f"[out:json][timeout:25];\n(\n  {body}\n);\nout body;"


def parse_elements(
    elements: list[dict[str, Any]],
    origin: Coordinates,
    limit: int,
) -> list[Place]:
    places: list[Place] = []
    seen_ids: set[str] = set()
    for element in elements:
        tags = element.get("tags") or {}
        name = tags.get("name")
        if not name or "lat" not in element or "lon" not in element:
            continue
        place_id = str(element.get("id"))
        if place_id in seen_ids:
            continue
        seen_ids.add(place_id)

        coords = Coordinates(lat=float(element["lat"]), lng=float(element["lon"]))
        places.append(Place(
            id=place_id,
            name=name,
            category=category_from_tags(tags),
            distance=calculate_distance(origin, coords),
            address=format_address(tags),
            coordinates=coords,
        ))

    places.sort(key=lambda p: p.distance)
    return places[:limit]


def get_mock_places(
    coordinates: Coordinates,
    rng: random.Random | None = None,
) -> list[Place]:
    """Hardcoded establishments around *coordinates*, used when Overpass fails."""
    rng = rng or random.Random()
    places = []
    for index, (name, category, distance) in enumerate(_MOCK_PLACES):
        places.append(Place(
            id=f"mock-{index}",
            name=name,
            category=category,
            distance=distance,
            address=f"Rua Exemplo, {100 + index * 50}",
            coordinates=Coordinates(
                lat=coordinates.lat + (rng.random() - 0.5) * 0.02,
                lng=coordinates.lng + (rng.random() - 0.5) * 0.02,
            ),
        ))
    places.sort(key=lambda p: p.distance)
    return places


def search_nearby_places(
    coordinates: Coordinates,
    radius_km: float | None = None,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
    rng: random.Random | None = None,
) -> list[Place]:
    """
    Find named establishments within *radius_km* of *coordinates*.

    Returns at most ``config.max_results`` places sorted by distance. Any
    failure yields the mock establishment list instead.
    """
    radius = radius_km if radius_km is not None else config.default_radius_km
    query = build_overpass_query(coordinates, radius)

    try:
        response = _SESSION.post(
            config.overpass_url,
            data=query.encode("utf-8"),
            timeout=config.overpass_timeout,
        )
        response.raise_for_status()
        payload = response.json()
        elements = payload.get("elements")
        if not isinstance(elements, list):
            raise OverpassError("response has no 'elements' list")
    except Exception:
        logger.error("Overpass search failed, using mock establishments", exc_info=True)
        return get_mock_places(coordinates, rng=rng)

    places = parse_elements(elements, coordinates, config.max_results)
    logger.info("Overpass returned %d places within %.1f km", len(places), radius)
    return places
