"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.location import Location
from app.models.restaurant import RestaurantEntry
from app.models.weather import WeatherEntry

__all__ = ["Base", "Location", "WeatherEntry", "RestaurantEntry"]
