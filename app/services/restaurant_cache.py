"""Restaurant cache — Yelp businesses per location, stale after RESTAURANT_TTL_HOURS."""

from app.config import settings
from app.integrations import YelpClient
from app.models import RestaurantEntry
from app.orchestrator.schemas import Business
from app.services.group_cache import GroupCache, LocationLike
from app.services.staleness import HOUR_MS

SEARCH_TERM = "restaurants"


class RestaurantCache(GroupCache):
    model = RestaurantEntry
    category = "restaurants"
    unit_ms = HOUR_MS

    def __init__(self, database, business_search: YelpClient, ttl: float | None = None, **kwargs):
        super().__init__(
            database,
            ttl=settings.restaurant_ttl_hours if ttl is None else ttl,
            **kwargs,
        )
        self.business_search = business_search

    async def fetch(self, location: LocationLike) -> list[Business]:
        return await self.business_search.search_businesses(
            location.latitude, location.longitude, term=SEARCH_TERM,
        )

    def build_entry(self, item: Business, location_id: int, created_at: int) -> RestaurantEntry:
        return RestaurantEntry(
            name=item.name,
            image_url=item.image_url,
            price=item.price,
            rating=item.rating,
            url=item.url,
            location_id=location_id,
            created_at=created_at,
        )
