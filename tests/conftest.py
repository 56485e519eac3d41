"""Shared test fixtures and configuration."""

import os

# Must be set before app.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-google-key")
os.environ.setdefault("DARK_SKY_API_KEY", "test-darksky-key")
os.environ.setdefault("YELP_API_KEY", "test-yelp-key")
os.environ.setdefault("DB_CONNECT_ATTEMPTS", "1")
os.environ.setdefault("DB_CONNECT_RETRY_SECONDS", "0")

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import event, func, select  # noqa: E402

from app.database import Database  # noqa: E402
from app.models import Location  # noqa: E402
from app.orchestrator.schemas import Business, DailyForecast, GeocodeCandidate  # noqa: E402

# 2026-10-19 12:00:00 UTC
NOW_MS = 1_792_411_200_000
MINUTE = 60 * 1000
HOUR = 60 * MINUTE


class FakeClock:
    """Epoch-millis clock the tests can move by hand."""

    def __init__(self, now: int = NOW_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def db(tmp_path):
    """Fresh SQLite database with all tables created."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'explorer.db'}")
    event.listen(database.engine.sync_engine, "connect", _enable_foreign_keys)
    assert await database.init()
    yield database
    await database.dispose()


@pytest.fixture
async def seattle(db):
    """A stored Seattle location."""
    async with db.session() as session:
        location = Location(
            search_query="Seattle, WA",
            formatted_query="Seattle, WA, USA",
            latitude=47.6,
            longitude=-122.3,
        )
        session.add(location)
        await session.commit()
    return location


@pytest.fixture
def geocoder():
    mock = AsyncMock()
    mock.geocode.return_value = [
        GeocodeCandidate(formatted_address="Seattle, WA, USA", lat=47.6, lng=-122.3),
    ]
    return mock


@pytest.fixture
def forecaster():
    mock = AsyncMock()
    mock.daily_forecast.return_value = [
        DailyForecast(summary="Light rain in the morning.", time=1_792_368_000),
        DailyForecast(summary="Partly cloudy throughout the day.", time=1_792_454_400),
        DailyForecast(summary="Clear throughout the day.", time=1_792_540_800),
    ]
    return mock


@pytest.fixture
def business_search():
    mock = AsyncMock()
    mock.search_businesses.return_value = [
        Business(
            name="Pike Place Chowder",
            image_url="https://s3-media.fl.yelpcdn.com/bphoto/chowder.jpg",
            price="$$",
            rating=4.5,
            url="https://www.yelp.com/biz/pike-place-chowder-seattle",
        ),
        Business(
            name="Un Bien",
            image_url="",
            price=None,
            rating=4.0,
            url="https://www.yelp.com/biz/un-bien-seattle",
        ),
    ]
    return mock


@pytest.fixture
def count_rows(db):
    """Count rows of a model in the test database, optionally filtered by column."""

    async def _count(model, **filters) -> int:
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        async with db.session() as session:
            return (await session.execute(stmt)).scalar_one()

    return _count


@pytest.fixture
def add_rows(db):
    """Insert ORM rows straight into the test database."""

    async def _add(rows: list) -> None:
        async with db.session() as session:
            session.add_all(rows)
            await session.commit()

    return _add


@pytest.fixture
def sample_geocode_response():
    """Sample Google geocoding API response."""
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "Seattle, WA, USA",
                "geometry": {"location": {"lat": 47.6062095, "lng": -122.3320708}},
                "place_id": "ChIJVTPokywQkFQRmtVEaUZlJRA",
            },
        ],
    }


@pytest.fixture
def sample_darksky_response():
    """Sample Dark Sky forecast response (trimmed)."""
    return {
        "latitude": 47.6062095,
        "longitude": -122.3320708,
        "timezone": "America/Los_Angeles",
        "daily": {
            "summary": "Light rain throughout the week.",
            "data": [
                {"time": 1_792_368_000, "summary": "Light rain in the morning.", "temperatureHigh": 58.1},
                {"time": 1_792_454_400, "summary": "Mostly cloudy throughout the day.", "temperatureHigh": 55.4},
            ],
        },
    }


@pytest.fixture
def sample_yelp_response():
    """Sample Yelp business search response (trimmed)."""
    return {
        "total": 2,
        "businesses": [
            {
                "name": "Pike Place Chowder",
                "image_url": "https://s3-media.fl.yelpcdn.com/bphoto/chowder.jpg",
                "price": "$$",
                "rating": 4.5,
                "url": "https://www.yelp.com/biz/pike-place-chowder-seattle",
            },
            {
                "name": "Un Bien",
                "image_url": "",
                "rating": 4.0,
                "url": "https://www.yelp.com/biz/un-bien-seattle",
            },
        ],
    }
