from __future__ import annotations

import logging
from datetime import datetime, timezone

from openai import OpenAI

from .config import DEFAULT_IMAGE_CONFIG, ImageConfig
from .models import GeneratedImage

logger = logging.getLogger(__name__)

CATEGORY_PROMPTS: dict[str, str] = {
    "Mercado": (
        "A modern, clean supermarket interior with colorful fresh produce displays, "
        "shopping carts and bright lighting. Photorealistic."
    ),
    "Farmácia": (
        "A modern pharmacy interior with organized medicine shelves, a clean counter "
        "and a welcoming healthcare atmosphere. Photorealistic."
    ),
    "Lanchonete": (
        "A cozy snack bar with counter service, menu boards and a casual dining area. "
        "Photorealistic."
    ),
    "Cafeteria": (
        "A stylish coffee shop with an espresso machine, pastry display, wooden tables "
        "and warm lighting. Photorealistic."
    ),
    "Padaria": (
        "A traditional Brazilian bakery with fresh bread and pastry displays under warm "
        "golden lighting. Photorealistic."
    ),
    "Restaurante": (
        "An elegant restaurant interior with set tables, ambient lighting and "
        "sophisticated decor. Photorealistic."
    ),
    "Loja": (
        "A modern retail store with organized product displays, clean aisles and bright "
        "lighting. Photorealistic."
    ),
}

_SUPPORTED_SIZES = {"1024x1024", "1792x1024", "1024x1792"}


def prompt_for_category(category: str) -> str:
    return CATEGORY_PROMPTS.get(category, CATEGORY_PROMPTS["Loja"])


def generate_custom_image(
    prompt: str,
    size: str | None = None,
    config: ImageConfig = DEFAULT_IMAGE_CONFIG,
) -> GeneratedImage | None:
    """Generate one image for *prompt*. Returns ``None`` when disabled or on failure."""
    if not config.enabled or not config.api_key:
        logger.warning("OPENAI_API_KEY is not configured; image generation is disabled.")
        return None

    size = size or config.size
    if size not in _SUPPORTED_SIZES:
        logger.warning("Unsupported image size %s, using %s", size, config.size)
        size = config.size

    try:
        client = OpenAI(api_key=config.api_key, timeout=config.timeout)
        response = client.images.generate(
            model=config.model,
            prompt=prompt,
            n=1,
            size=size,
            quality=config.quality,
            style=config.style,
        )
        url = response.data[0].url if response.data else None
        if not url:
            return None
        return GeneratedImage(
            url=url,
            prompt=prompt,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

    except Exception:
        logger.warning("OpenAI image generation failed", exc_info=True)
        return None


def generate_establishment_image(
    category: str,
    config: ImageConfig = DEFAULT_IMAGE_CONFIG,
) -> GeneratedImage | None:
    return generate_custom_image(prompt_for_category(category), config=config)
