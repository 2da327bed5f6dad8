from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..geo.models import Coordinates, GeolocationError


class Category(str, Enum):
    mercado = "Mercado"
    farmacia = "Farmácia"
    lanchonete = "Lanchonete"
    cafeteria = "Cafeteria"
    padaria = "Padaria"
    restaurante = "Restaurante"
    loja = "Loja"
    outros = "Outros"


class Place(BaseModel):
    id: str
    name: str
    category: Category
    distance: float = Field(..., ge=0.0)
    address: str
    coordinates: Coordinates
    # Google Places only
    rating: float | None = None
    total_ratings: int | None = None
    open_now: bool | None = None
    price_level: int | None = None
    photos: list[str] = Field(default_factory=list)
    website: str | None = None


class Product(BaseModel):
    id: str
    name: str
    price: float = Field(..., ge=0.0)
    store: str
    distance: str
    category: Category
    source: str | None = None
    last_updated: str | None = None
    confidence: str | None = None
    is_real: bool = False


class SocialMedia(BaseModel):
    instagram: str | None = None
    facebook: str | None = None
    website: str | None = None


class StoreWithProducts(Place):
    products: list[Product] = Field(default_factory=list)
    social_media: SocialMedia | None = None
    store_url: str | None = None


class SearchRequest(BaseModel):
    location: str = Field(default="", description="CEP (00000-000) or 'Cidade - UF'")
    category: str = Field(default="all", description="A Category value or 'all'")


class NearbySearchRequest(BaseModel):
    coordinates: Coordinates | None = None
    error: GeolocationError | None = None
    category: str = "all"


class SearchResponse(BaseModel):
    stores: list[StoreWithProducts]
    coordinates: Coordinates
    city: str
    has_real_prices: bool
    best_prices: dict[str, float] = Field(default_factory=dict)
    message: str | None = None
