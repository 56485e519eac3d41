"""Pydantic models for provider payloads and API input/output.

Split into: provider payloads (decoded at the integration boundary),
inbound query descriptors, and outbound API records.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MAX_UNIX_TIME = 253_402_300_799


def _as_dict(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return data


# ═══════════════ PROVIDER PAYLOADS ═══════════════

class GeocodeCandidate(BaseModel):
    """One Google geocoding result."""
    formatted_address: str
    lat: float
    lng: float

    @classmethod
    def from_payload(cls, data: Any) -> GeocodeCandidate:
        data = _as_dict(data)
        location = _as_dict(_as_dict(data.get("geometry", {})).get("location", {}))
        return cls.model_validate({
            "formatted_address": data.get("formatted_address"),
            "lat": location.get("lat"),
            "lng": location.get("lng"),
        })


class DailyForecast(BaseModel):
    """One day from Dark Sky's daily.data block."""
    summary: str
    # unix seconds, capped at 9999-12-31T23:59:59Z so it renders as a date
    time: int = Field(ge=0, le=MAX_UNIX_TIME)

    @classmethod
    def from_payload(cls, data: Any) -> DailyForecast:
        data = _as_dict(data)
        return cls.model_validate({
            "summary": data.get("summary"),
            "time": data.get("time"),
        })


class Business(BaseModel):
    """One Yelp business search result. Yelp omits price for some businesses."""
    name: str
    image_url: str = ""
    price: str | None = None
    rating: float
    url: str

    @classmethod
    def from_payload(cls, data: Any) -> Business:
        data = _as_dict(data)
        return cls.model_validate({
            "name": data.get("name"),
            "image_url": data.get("image_url") or "",
            "price": data.get("price"),
            "rating": data.get("rating"),
            "url": data.get("url"),
        })


# ═══════════════ INBOUND ═══════════════

class LocationRef(BaseModel):
    """A previously resolved location, as sent back by the frontend."""
    id: int
    latitude: float
    longitude: float
    search_query: str = ""
    formatted_query: str = ""


# ═══════════════ OUTBOUND ═══════════════

class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    search_query: str
    formatted_query: str
    latitude: float
    longitude: float
    id: int


class WeatherOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    forecast: str
    time: str


class RestaurantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    image_url: str
    price: str | None = None
    rating: float
    url: str
