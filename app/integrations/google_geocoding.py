"""Google Maps Geocoding API integration.

Docs: https://developers.google.com/maps/documentation/geocoding/requests-geocoding
"""

import logging

from app.config import settings
from app.exceptions import NotFound, ProviderDecodingError, ProviderUnavailable
from app.integrations.http import get_json
from app.orchestrator.schemas import GeocodeCandidate

logger = logging.getLogger(__name__)

PROVIDER = "Google Geocoding"

# Statuses that mean "the request worked, there is just nothing there"
EMPTY_STATUSES = {"ZERO_RESULTS"}
OK_STATUSES = {"OK"} | EMPTY_STATUSES


class GeocodingClient:
    """Async client resolving a place name to coordinates."""

    def __init__(self, api_key: str | None = None, url: str | None = None, timeout: int | None = None):
        self.api_key = settings.google_maps_api_key if api_key is None else api_key
        self.url = url or settings.geocode_url
        self.timeout = timeout or settings.provider_timeout_seconds

    async def geocode(self, address: str) -> list[GeocodeCandidate]:
        """Return every candidate for the address. Raises NotFound when there are none."""
        data, elapsed_ms = await get_json(
            PROVIDER,
            self.url,
            params={"address": address, "key": self.api_key},
            timeout=self.timeout,
        )

        if not isinstance(data, dict):
            raise ProviderDecodingError(PROVIDER, "response is not an object")

        status = data.get("status", "OK")
        if status not in OK_STATUSES:
            logger.warning("%s | status=%s | %dms", PROVIDER, status, elapsed_ms)
            raise ProviderUnavailable(PROVIDER, f"status {status}")

        results = data.get("results") or []
        if status in EMPTY_STATUSES or not results:
            logger.info("%s | no results | %dms | address=%s", PROVIDER, elapsed_ms, address[:80])
            raise NotFound(f"No location found for {address!r}")

        try:
            candidates = [GeocodeCandidate.from_payload(r) for r in results]
        except ValueError as e:
            raise ProviderDecodingError(PROVIDER, str(e)[:200]) from e

        logger.info(
            "%s OK | results=%d | %dms | address=%s",
            PROVIDER, len(candidates), elapsed_ms, address[:80],
        )
        return candidates
