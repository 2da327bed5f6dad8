from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class PlacesConfig:
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_timeout: float = 25.0
    google_api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    google_base_url: str = "https://maps.googleapis.com/maps/api/place"
    google_timeout: float = 10.0
    default_radius_km: float = 5.0
    max_results: int = 20

    @property
    def google_enabled(self) -> bool:
        return bool(self.google_api_key)


DEFAULT_PLACES_CONFIG = PlacesConfig()
