"""Orchestrator — routes incoming queries to the category caches.

Responsibilities:
  - Parse the inbound query descriptor (place name or resolved location)
  - Dispatch to the matching cache controller
  - Shape stored records into API output
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from app.database import Database
from app.exceptions import InvalidQuery
from app.integrations import ProviderGateway
from app.orchestrator.schemas import LocationOut, LocationRef, RestaurantOut, WeatherOut
from app.services.keyed_lock import KeyedLock
from app.services.location_cache import LocationCache
from app.services.restaurant_cache import RestaurantCache
from app.services.weather_cache import WeatherCache

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 255
LOCATION_FIELDS = ("id", "latitude", "longitude", "search_query", "formatted_query")


class ExplorerRouter:
    """Per-category entry points wired to one database and one provider gateway."""

    def __init__(self, database: Database, gateway: ProviderGateway | None = None, **cache_options):
        gateway = gateway or ProviderGateway()
        locks = KeyedLock()
        self.locations = LocationCache(database, gateway.geocoder, locks=locks)
        self.weather = WeatherCache(database, gateway.forecaster, locks=locks, **cache_options)
        self.restaurants = RestaurantCache(database, gateway.business_search, locks=locks, **cache_options)

    async def get_location(self, params: Mapping[str, Any]) -> LocationOut:
        query = _parse_search_query(params)
        logger.info("Orchestrator routing | category=location | query=%s", query[:80])
        location = await self.locations.lookup(query)
        return LocationOut.model_validate(location)

    async def get_weather(self, params: Mapping[str, Any]) -> list[WeatherOut]:
        ref = _parse_location_ref(params)
        logger.info("Orchestrator routing | category=weather | location_id=%d", ref.id)
        entries = await self.weather.lookup(ref)
        return [WeatherOut.model_validate(e) for e in entries]

    async def get_restaurants(self, params: Mapping[str, Any]) -> list[RestaurantOut]:
        ref = _parse_location_ref(params)
        logger.info("Orchestrator routing | category=restaurants | location_id=%d", ref.id)
        entries = await self.restaurants.lookup(ref)
        return [RestaurantOut.model_validate(e) for e in entries]


# ═══════════════ INPUT PARSING ═══════════════

def _parse_search_query(params: Mapping[str, Any]) -> str:
    query = str(params.get("data", params.get("query", "")) or "").strip()
    if not query:
        raise InvalidQuery("Missing location query.")
    if len(query) > MAX_QUERY_LENGTH:
        raise InvalidQuery(f"Location query longer than {MAX_QUERY_LENGTH} characters.")
    return query


def _parse_location_ref(params: Mapping[str, Any]) -> LocationRef:
    """Accept a resolved location as data=<json>, data[field]=... or flat field=... params."""
    raw = params.get("data")
    if isinstance(raw, str) and raw.strip().startswith("{"):
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise InvalidQuery("Location descriptor is not valid JSON.") from e
    elif isinstance(raw, Mapping):
        data = dict(raw)
    else:
        data = {}
        for field in LOCATION_FIELDS:
            value = params.get(f"data[{field}]", params.get(field))
            if value is not None:
                data[field] = value

    try:
        return LocationRef.model_validate(data)
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise InvalidQuery(f"Invalid location descriptor: {missing}") from e
