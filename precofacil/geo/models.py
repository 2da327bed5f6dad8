from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class AddressInfo(BaseModel):
    cep: str | None = None
    city: str
    state: str
    street: str | None = None
    neighborhood: str | None = None
    coordinates: Coordinates


class GeolocationError(str, Enum):
    unsupported = "unsupported"
    permission_denied = "permission_denied"
    unavailable = "unavailable"
    timeout = "timeout"


GEOLOCATION_MESSAGES: dict[GeolocationError, str] = {
    GeolocationError.unsupported: (
        "Seu navegador não suporta geolocalização. Tente usar um navegador mais recente."
    ),
    GeolocationError.permission_denied: (
        "Você negou o acesso à localização. Permita o acesso à localização "
        "nas configurações do navegador e tente novamente."
    ),
    GeolocationError.unavailable: (
        "Localização indisponível no momento. Verifique se o GPS está ativado "
        "e se você está em um local com boa conexão."
    ),
    GeolocationError.timeout: (
        "Tempo esgotado ao buscar sua localização. Verifique se o GPS está ativado "
        "e tente novamente."
    ),
}
