from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class GeoConfig:
    viacep_url: str = "https://viacep.com.br/ws"
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    user_agent: str = os.getenv("NOMINATIM_USER_AGENT", "PrecoFacil-App")
    timeout: float = 15.0
    # São Paulo, used when a CEP resolves but its street cannot be geocoded
    fallback_lat: float = -23.5505
    fallback_lng: float = -46.6333


DEFAULT_GEO_CONFIG = GeoConfig()
