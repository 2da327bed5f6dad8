from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor

from ..llm.config import is_llm_configured
from ..llm.groq_client import fetch_real_prices
from ..llm.models import StoreRealPrices
from ..places.models import Place, Product, StoreWithProducts
from .mock_products import generate_mock_products

logger = logging.getLogger(__name__)

BATCH_SIZE = 5


def _real_products(place: Place, real: StoreRealPrices) -> list[Product]:
    return [
        Product(
            id=f"{place.id}-{index}",
            name=item.product_name,
            price=item.price,
            store=place.name,
            distance=f"{place.distance} km",
            category=place.category,
            source=item.source or None,
            last_updated=item.last_updated or None,
            confidence=item.confidence,
            is_real=True,
        )
        for index, item in enumerate(real.prices)
    ]


def _lookup(place: Place, city: str) -> StoreRealPrices | None:
    try:
        return fetch_real_prices(place.name, place.category.value, city)
    except Exception:
        logger.error("Price lookup failed for %s", place.name, exc_info=True)
        return None


def _with_products(
    place: Place,
    real: StoreRealPrices | None,
    rng: random.Random | None,
) -> StoreWithProducts:
    base = place.model_dump()
    if real and real.prices:
        logger.info("Found %d real prices for %s", len(real.prices), place.name)
        return StoreWithProducts(
            **base,
            products=_real_products(place, real),
            social_media=real.social_media,
        )
    return StoreWithProducts(**base, products=generate_mock_products(place, rng))


def add_real_products_to_places(
    places: list[Place],
    city: str,
    rng: random.Random | None = None,
    batch_size: int = BATCH_SIZE,
) -> list[StoreWithProducts]:
    """
    Attach products to every place, preferring LLM-sourced real prices.

    Lookups run ``batch_size`` at a time; a batch completes before the next
    one starts. Mock fallbacks are drawn from *rng* on the calling thread in
    input order, so a seeded ``rng`` gives the same output regardless of
    lookup latency. Output order matches input order.
    """
    if not places:
        return []

    if not is_llm_configured():
        logger.warning("GROQ_API_KEY is not configured; using generated products for %d places.", len(places))
        return add_mock_products_to_places(places, rng)

    stores: list[StoreWithProducts] = []
    with ThreadPoolExecutor(max_workers=batch_size) as executor:
        for start in range(0, len(places), batch_size):
            batch = places[start:start + batch_size]
            futures = [executor.submit(_lookup, place, city) for place in batch]
            results = [f.result() for f in futures]
            stores.extend(_with_products(place, real, rng) for place, real in zip(batch, results))
    return stores


def add_mock_products_to_places(
    places: list[Place],
    rng: random.Random | None = None,
) -> list[StoreWithProducts]:
    return [
        StoreWithProducts(**place.model_dump(), products=generate_mock_products(place, rng))
        for place in places
    ]
