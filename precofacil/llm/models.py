from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ..places.models import SocialMedia

Confidence = Literal["high", "medium", "low"]


class RealPrice(BaseModel):
    product_name: str = Field(..., alias="productName")
    price: float = Field(..., ge=0.0)
    source: str = ""
    last_updated: str = Field(default="", alias="lastUpdated")
    confidence: Confidence = "low"

    model_config = {"populate_by_name": True}


class StoreRealPrices(BaseModel):
    store_name: str = Field(default="", alias="storeName")
    store_type: str = Field(default="", alias="storeType")
    social_media: SocialMedia = Field(default_factory=SocialMedia, alias="socialMedia")
    prices: list[RealPrice] = Field(default_factory=list)
    last_scraped: str | None = Field(default=None, alias="lastScraped")

    model_config = {"populate_by_name": True}


class ProductPriceRequest(BaseModel):
    product_name: str = Field(..., min_length=1)
    store_names: list[str] = Field(..., min_length=1)
    city: str = Field(..., min_length=1)


class GeneratedImage(BaseModel):
    url: str
    prompt: str
    created_at: str
