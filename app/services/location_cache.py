"""Location cache — permanent cache-aside lookup from place name to coordinates.

Flow:
  - Hit: first stored row for search_query, returned as-is (no TTL)
  - Miss: geocode, persist the first candidate, return it with its id
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Database, store_errors
from app.exceptions import NotFound
from app.integrations import GeocodingClient
from app.models import Location
from app.services.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


class LocationCache:
    """Resolves a search query to a stored Location, geocoding on miss."""

    def __init__(self, database: Database, geocoder: GeocodingClient, locks: KeyedLock | None = None):
        self.database = database
        self.geocoder = geocoder
        self._locks = locks or KeyedLock()

    async def lookup(self, query: str) -> Location:
        async with self._locks.hold((Location.__tablename__, query)):
            with store_errors("location lookup"):
                async with self.database.session() as session:
                    existing = await _find(session, query)
            if existing is not None:
                logger.info("Cache HIT | category=location | id=%d | query=%s", existing.id, query[:80])
                return existing

            logger.info("Cache MISS | category=location | query=%s", query[:80])
            candidates = await self.geocoder.geocode(query)
            if not candidates:
                raise NotFound(f"No location found for {query!r}")

            first = candidates[0]
            location = Location(
                search_query=query,
                formatted_query=first.formatted_address,
                latitude=first.lat,
                longitude=first.lng,
            )
            return await self._save(location)

    async def _save(self, location: Location) -> Location:
        with store_errors("location insert"):
            async with self.database.session() as session:
                session.add(location)
                try:
                    await session.commit()
                except IntegrityError:
                    # another process stored the same search_query first
                    await session.rollback()
                    existing = await _find(session, location.search_query)
                    if existing is None:
                        raise
                    logger.info("Location stored concurrently | id=%d", existing.id)
                    return existing
        logger.info("Location saved | id=%d | query=%s", location.id, location.search_query[:80])
        return location


async def _find(session: AsyncSession, query: str) -> Location | None:
    result = await session.execute(
        select(Location).where(Location.search_query == query).order_by(Location.id).limit(1)
    )
    return result.scalars().first()
