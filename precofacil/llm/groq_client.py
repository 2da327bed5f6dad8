from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig
from .models import RealPrice, StoreRealPrices

logger = logging.getLogger(__name__)

TRUSTED_CONFIDENCE = {"high", "medium"}

STORE_SYSTEM_PROMPT = (
    "Você é um assistente que pesquisa preços reais de produtos em estabelecimentos "
    "comerciais brasileiros, usando redes sociais (Instagram, Facebook) e sites. "
    "Retorne APENAS dados verificáveis. Nunca invente preços."
)

STORE_USER_TEMPLATE = """\
Encontre preços atuais do estabelecimento "{store_name}" (tipo: {store_type}) em {city}.

Procure posts recentes (últimos 30 dias), promoções e ofertas publicadas pelo próprio \
estabelecimento.

Responda SOMENTE com JSON neste formato:
{{
  "storeName": "{store_name}",
  "storeType": "{store_type}",
  "socialMedia": {{"instagram": "@usuario ou URL", "facebook": "URL", "website": "URL"}},
  "prices": [
    {{
      "productName": "nome exato do produto",
      "price": 0.00,
      "source": "Instagram/Facebook/Site",
      "lastUpdated": "data da publicação",
      "confidence": "high/medium/low"
    }}
  ]
}}

Se não encontrar preços reais, retorne "prices" como lista vazia."""

PRODUCT_SYSTEM_PROMPT = (
    "Você busca o preço atual de um produto específico em estabelecimentos "
    "brasileiros. Retorne apenas dados verificáveis."
)

PRODUCT_USER_TEMPLATE = """\
Qual o preço atual de "{product_name}" nestes estabelecimentos em {city}: {stores}?

Responda SOMENTE com JSON:
{{"prices": [{{"productName": "{product_name}", "price": 0.00, \
"source": "estabelecimento + fonte", "lastUpdated": "data", \
"confidence": "high/medium/low"}}]}}

Se não encontrar preços reais, retorne "prices" como lista vazia."""


def _complete_json(system: str, user: str, config: LLMConfig) -> dict[str, Any]:
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    response = client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content or ""
    return json.loads(content)


def _trusted_prices(raw_prices: list[Any]) -> list[RealPrice]:
    prices: list[RealPrice] = []
    for item in raw_prices or []:
        if not isinstance(item, dict) or item.get("confidence") not in TRUSTED_CONFIDENCE:
            continue
        try:
            prices.append(RealPrice.model_validate(item))
        except ValueError:
            logger.debug("Discarding malformed price entry: %s", item)
    return prices


def fetch_real_prices(
    store_name: str,
    store_type: str,
    city: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> StoreRealPrices | None:
    """
    Ask the LLM for prices a store has published recently.

    Only high and medium confidence entries are kept. Returns ``None`` when
    the LLM is not configured or on any failure (timeout, bad JSON, API error).
    """
    if not config.enabled or not config.api_key:
        logger.debug("GROQ_API_KEY is not configured; real prices are disabled.")
        return None

    try:
        parsed = _complete_json(
            STORE_SYSTEM_PROMPT,
            STORE_USER_TEMPLATE.format(store_name=store_name, store_type=store_type, city=city),
            config,
        )
        result = StoreRealPrices(
            store_name=parsed.get("storeName") or store_name,
            store_type=parsed.get("storeType") or store_type,
            social_media=parsed.get("socialMedia") or {},
            prices=_trusted_prices(parsed.get("prices")),
            last_scraped=datetime.now(timezone.utc).isoformat(),
        )
        return result

    except Exception:
        logger.warning("Groq price lookup failed for %s", store_name, exc_info=True)
        return None


def search_specific_product_prices(
    product_name: str,
    store_names: list[str],
    city: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[RealPrice]:
    """Price one product across several stores. Empty list on any failure."""
    if not config.enabled or not config.api_key:
        return []

    if not store_names:
        return []

    try:
        parsed = _complete_json(
            PRODUCT_SYSTEM_PROMPT,
            PRODUCT_USER_TEMPLATE.format(
                product_name=product_name,
                city=city,
                stores=", ".join(store_names),
            ),
            config,
        )
        return _trusted_prices(parsed.get("prices"))

    except Exception:
        logger.warning("Groq product price lookup failed for %s", product_name, exc_info=True)
        return []
