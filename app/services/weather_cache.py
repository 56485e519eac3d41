"""Weather cache — daily forecasts per location, stale after WEATHER_TTL_MINUTES."""

from datetime import datetime, timezone

from app.config import settings
from app.integrations import DarkSkyClient
from app.models import WeatherEntry
from app.orchestrator.schemas import DailyForecast
from app.services.group_cache import GroupCache, LocationLike
from app.services.staleness import MINUTE_MS


def display_day(unix_time: int) -> str:
    """Render a unix timestamp as a 15-character day string, e.g. 'Mon Oct 19 2026' (UTC)."""
    return datetime.fromtimestamp(unix_time, tz=timezone.utc).strftime("%a %b %d %Y")


class WeatherCache(GroupCache):
    model = WeatherEntry
    category = "weather"
    unit_ms = MINUTE_MS

    def __init__(self, database, forecaster: DarkSkyClient, ttl: float | None = None, **kwargs):
        super().__init__(
            database,
            ttl=settings.weather_ttl_minutes if ttl is None else ttl,
            **kwargs,
        )
        self.forecaster = forecaster

    async def fetch(self, location: LocationLike) -> list[DailyForecast]:
        return await self.forecaster.daily_forecast(location.latitude, location.longitude)

    def build_entry(self, item: DailyForecast, location_id: int, created_at: int) -> WeatherEntry:
        return WeatherEntry(
            forecast=item.summary,
            time=display_day(item.time),
            location_id=location_id,
            created_at=created_at,
        )
