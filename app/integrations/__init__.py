"""Provider gateway — the three remote data sources behind the caches."""

from app.integrations.dark_sky import DarkSkyClient
from app.integrations.google_geocoding import GeocodingClient
from app.integrations.yelp import YelpClient


class ProviderGateway:
    """Bundles one client per provider so callers can inject fakes as a unit."""

    def __init__(
        self,
        geocoder: GeocodingClient | None = None,
        forecaster: DarkSkyClient | None = None,
        business_search: YelpClient | None = None,
    ):
        self.geocoder = geocoder or GeocodingClient()
        self.forecaster = forecaster or DarkSkyClient()
        self.business_search = business_search or YelpClient()


__all__ = ["DarkSkyClient", "GeocodingClient", "ProviderGateway", "YelpClient"]
