"""Shared cache-aside flow for per-location groups (weather days, restaurants).

A group is every row of one table for one location_id. It is fresh or stale
as a whole, judged by the created_at of its first row:
  - unknown location_id: NotFound, before any provider call
  - fresh: stored rows are returned, no provider call, no writes
  - stale or empty: the provider is called first; only if that succeeds are
    the old rows deleted and the new ones inserted, in one transaction
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from sqlalchemy import delete, select

from app.config import settings
from app.database import Database, store_errors
from app.exceptions import NotFound
from app.models import Location
from app.services.keyed_lock import KeyedLock
from app.services.staleness import cache_age, is_stale, now_ms

logger = logging.getLogger(__name__)


class LocationLike(Protocol):
    id: int
    latitude: float
    longitude: float


class GroupCache(ABC):
    """Subclasses set model, category and unit_ms and implement fetch and build_entry."""

    model: Any
    category: str
    unit_ms: int

    def __init__(
        self,
        database: Database,
        ttl: float,
        formula: str | None = None,
        clock: Callable[[], int] = now_ms,
        locks: KeyedLock | None = None,
    ):
        self.database = database
        self.ttl = ttl
        self.formula = formula or settings.staleness_formula
        self._clock = clock
        self._locks = locks or KeyedLock()

    @abstractmethod
    async def fetch(self, location: LocationLike) -> Sequence[Any]:
        """Call the provider for this category."""

    @abstractmethod
    def build_entry(self, item: Any, location_id: int, created_at: int) -> Any:
        """Turn one provider item into an unsaved ORM row."""

    async def lookup(self, location: LocationLike) -> list[Any]:
        async with self._locks.hold((self.model.__tablename__, location.id)):
            with store_errors(f"{self.category} lookup"):
                async with self.database.session() as session:
                    if await session.get(Location, location.id) is None:
                        raise NotFound(f"Unknown location id {location.id}")
                    result = await session.execute(
                        select(self.model)
                        .where(self.model.location_id == location.id)
                        .order_by(self.model.id)
                    )
                    rows = list(result.scalars().all())

            stale = False
            if rows:
                created_at, now = rows[0].created_at, self._clock()
                if not is_stale(created_at, now, self.unit_ms, self.ttl, self.formula):
                    logger.info(
                        "Cache HIT | category=%s | location_id=%d | rows=%d",
                        self.category, location.id, len(rows),
                    )
                    return rows
                logger.info(
                    "Cache STALE | category=%s | location_id=%d | age=%.1f > %s",
                    self.category, location.id,
                    cache_age(created_at, now, self.unit_ms, self.formula), self.ttl,
                )
                stale = True
            else:
                logger.info("Cache MISS | category=%s | location_id=%d", self.category, location.id)

            return await self._refresh(location, stale)

    async def _refresh(self, location: LocationLike, stale: bool) -> list[Any]:
        items = await self.fetch(location)
        created_at = self._clock()
        entries = [self.build_entry(item, location.id, created_at) for item in items]

        with store_errors(f"{self.category} refresh"):
            async with self.database.session() as session:
                async with session.begin():
                    if stale:
                        await session.execute(
                            delete(self.model).where(self.model.location_id == location.id)
                        )
                    session.add_all(entries)

        logger.info(
            "Cache SET | category=%s | location_id=%d | rows=%d",
            self.category, location.id, len(entries),
        )
        return entries
