"""Postal code and address geocoding (ViaCEP + Nominatim)."""

from __future__ import annotations

import logging
import re
from typing import Any

import requests

from .config import DEFAULT_GEO_CONFIG, GeoConfig
from .models import AddressInfo, Coordinates

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

CEP_LENGTH = 8
CEP_PATTERN = re.compile(r"^\d{5}-?\d{3}$")
_NON_DIGITS = re.compile(r"\D")


class ViaCepError(RuntimeError):
    """Raised when ViaCEP cannot resolve a postal code."""


def clean_cep(raw: str) -> str:
    return _NON_DIGITS.sub("", raw or "")


def is_valid_cep(raw: str) -> bool:
    return len(clean_cep(raw)) == CEP_LENGTH


def looks_like_cep(text: str) -> bool:
    """True for inputs shaped like ``01310-100`` or ``01310100``."""
    return bool(CEP_PATTERN.match((text or "").strip()))


def _fetch_viacep(cep: str, config: GeoConfig) -> dict[str, Any]:
    response = _SESSION.get(f"{config.viacep_url}/{cep}/json/", timeout=config.timeout)
    response.raise_for_status()
    payload = response.json()
    if payload.get("erro"):
        raise ViaCepError(f"CEP {cep} not found")
    return payload


def get_coordinates_from_address(
    address: str,
    config: GeoConfig = DEFAULT_GEO_CONFIG,
) -> Coordinates | None:
    """Geocode a free-text address with Nominatim. ``None`` when nothing matches."""
    try:
        response = _SESSION.get(
            config.nominatim_url,
            params={"format": "json", "q": address, "limit": 1},
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not data:
            return None
        return Coordinates(lat=float(data[0]["lat"]), lng=float(data[0]["lon"]))
    except Exception:
        logger.warning("Nominatim lookup failed for %r", address, exc_info=True)
        return None


def get_coordinates_from_city(
    city: str,
    state: str | None = None,
    config: GeoConfig = DEFAULT_GEO_CONFIG,
) -> Coordinates | None:
    query = f"{city}, {state}, Brasil" if state else f"{city}, Brasil"
    return get_coordinates_from_address(query, config=config)


def get_address_from_cep(
    cep: str,
    config: GeoConfig = DEFAULT_GEO_CONFIG,
) -> AddressInfo | None:
    """
    Resolve a CEP to an address and coordinates.

    Malformed codes are rejected without touching the network. When the
    street itself cannot be geocoded the configured fallback coordinate is
    used, so a found CEP always yields coordinates.
    """
    digits = clean_cep(cep)
    if not is_valid_cep(digits):
        logger.info("Rejected malformed CEP %r", cep)
        return None

    try:
        data = _fetch_viacep(digits, config)
    except Exception:
        logger.warning("ViaCEP lookup failed for %s", digits, exc_info=True)
        return None

    city = data.get("localidade") or ""
    state = data.get("uf") or ""
    street = data.get("logradouro") or ""

    coordinates = get_coordinates_from_address(f"{street}, {city}, {state}, Brasil", config=config)
    if coordinates is None:
        coordinates = Coordinates(lat=config.fallback_lat, lng=config.fallback_lng)

    return AddressInfo(
        cep=data.get("cep") or digits,
        city=city,
        state=state,
        street=street or None,
        neighborhood=data.get("bairro") or None,
        coordinates=coordinates,
    )
