"""City Explorer backend — FastAPI application entry point.

Provides /location, /weather and /yelp endpoints compatible with the existing frontend.
"""

import logging
import time
from collections.abc import Awaitable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import database
from app.exceptions import ExplorerError, InvalidQuery, NotFound
from app.orchestrator.router import ExplorerRouter

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger("city_explorer")

explorer = ExplorerRouter(database)


def get_explorer() -> ExplorerRouter:
    return explorer


# ═══════════════ LIFESPAN ═══════════════

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("City Explorer backend starting | port=%d", settings.port)
    if settings.missing_api_keys:
        logger.warning("Provider keys not set: %s", ", ".join(settings.missing_api_keys))

    # Graceful degradation: requests retry the connection through the pool
    db_ok = await database.init()
    logger.info("Database: %s", "connected" if db_ok else "unavailable (continuing without)")

    yield

    await database.dispose()
    logger.info("City Explorer backend shutting down")


# ═══════════════ APP ═══════════════

app = FastAPI(
    title="City Explorer API",
    description="Location, weather and restaurant lookups with a relational cache",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# ═══════════════ ENDPOINTS ═══════════════

@app.get("/health")
async def health():
    return {"status": "ok", "database": database.available}


@app.get("/location")
async def get_location(request: Request, router: ExplorerRouter = Depends(get_explorer)):
    return await _respond("location", router.get_location(request.query_params))


@app.get("/weather")
async def get_weather(request: Request, router: ExplorerRouter = Depends(get_explorer)):
    return await _respond("weather", router.get_weather(request.query_params))


@app.get("/yelp")
async def get_yelp(request: Request, router: ExplorerRouter = Depends(get_explorer)):
    return await _respond("restaurants", router.get_restaurants(request.query_params))


async def _respond(category: str, lookup: Awaitable[Any]) -> Response:
    """Await a lookup and map the error taxonomy onto HTTP responses."""
    start = time.monotonic()
    try:
        result = await lookup
    except NotFound as e:
        logger.info("Lookup not found | category=%s | %s", category, str(e)[:200])
        return Response(status_code=404)
    except InvalidQuery as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except ExplorerError as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.error("Lookup failed | category=%s | %dms | %s", category, elapsed_ms, str(e)[:300])
        return JSONResponse(
            status_code=500,
            content={"error": "Oh NOOO!!!!  We're so sorry.  We really tried."},
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.info("Lookup completed | category=%s | %dms", category, elapsed_ms)
    return JSONResponse(content=jsonable_encoder(result))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
