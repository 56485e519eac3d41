"""Dark Sky forecast API integration.

Docs: https://darksky.net/dev/docs#forecast-request
"""

import logging

from app.config import settings
from app.exceptions import ProviderDecodingError
from app.integrations.http import get_json
from app.orchestrator.schemas import DailyForecast

logger = logging.getLogger(__name__)

PROVIDER = "Dark Sky"


class DarkSkyClient:
    """Async client for the daily forecast of a coordinate pair."""

    def __init__(self, api_key: str | None = None, url: str | None = None, timeout: int | None = None):
        self.api_key = settings.dark_sky_api_key if api_key is None else api_key
        self.url = (url or settings.dark_sky_url).rstrip("/")
        self.timeout = timeout or settings.provider_timeout_seconds

    def forecast_url(self, lat: float, lng: float) -> str:
        return f"{self.url}/{self.api_key}/{lat},{lng}"

    async def daily_forecast(self, lat: float, lng: float) -> list[DailyForecast]:
        """Fetch the daily forecast block, one entry per day."""
        data, elapsed_ms = await get_json(PROVIDER, self.forecast_url(lat, lng), timeout=self.timeout)

        try:
            days = data["daily"]["data"]
            forecast = [DailyForecast.from_payload(d) for d in days]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderDecodingError(PROVIDER, f"unexpected daily payload: {str(e)[:200]}") from e

        logger.info("%s OK | days=%d | %dms | at=%s,%s", PROVIDER, len(forecast), elapsed_ms, lat, lng)
        return forecast
