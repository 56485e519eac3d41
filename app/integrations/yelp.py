"""Yelp Fusion business search integration.

Docs: https://docs.developer.yelp.com/reference/v3_business_search
"""

import logging

from app.config import settings
from app.exceptions import ProviderDecodingError
from app.integrations.http import get_json
from app.orchestrator.schemas import Business

logger = logging.getLogger(__name__)

PROVIDER = "Yelp"
DEFAULT_TERM = "restaurants"


class YelpClient:
    """Async client for businesses near a coordinate pair."""

    def __init__(self, api_key: str | None = None, url: str | None = None, timeout: int | None = None):
        self.api_key = settings.yelp_api_key if api_key is None else api_key
        self.url = url or settings.yelp_url
        self.timeout = timeout or settings.provider_timeout_seconds

    async def search_businesses(self, lat: float, lng: float, term: str = DEFAULT_TERM) -> list[Business]:
        """Search businesses matching term around lat/lng."""
        data, elapsed_ms = await get_json(
            PROVIDER,
            self.url,
            params={"term": term, "latitude": str(lat), "longitude": str(lng)},
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )

        try:
            businesses = [Business.from_payload(b) for b in data["businesses"]]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderDecodingError(PROVIDER, f"unexpected businesses payload: {str(e)[:200]}") from e

        logger.info("%s OK | results=%d | %dms | term=%s", PROVIDER, len(businesses), elapsed_ms, term)
        return businesses
