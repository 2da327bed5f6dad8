from __future__ import annotations

from pydantic import BaseModel


class CityOption(BaseModel):
    id: str
    name: str
    state: str
    display_name: str
