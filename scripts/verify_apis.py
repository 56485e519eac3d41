#!/usr/bin/env python3
"""Real API verification script — run outside sandbox with actual API keys.

Usage:
  1. Fill in GOOGLE_MAPS_API_KEY, DARK_SKY_API_KEY and YELP_API_KEY in .env
  2. Run: python scripts/verify_apis.py "Seattle, WA"

Steps:
  Step 1: Verify .env configuration
  Step 2: Test Google geocoding
  Step 3: Test Dark Sky daily forecast
  Step 4: Test Yelp business search
"""

import asyncio
import sys

from app.exceptions import ExplorerError


def step_header(n: int, title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  Step {n}: {title}")
    print(f"{'='*60}\n")


def ok(msg: str) -> None:
    print(f"  ✅ {msg}")


def fail(msg: str) -> None:
    print(f"  ❌ {msg}")


def info(msg: str) -> None:
    print(f"  ℹ️  {msg}")


async def step1_verify_env() -> bool:
    step_header(1, "Verify .env Configuration")
    from app.config import settings

    if settings.missing_api_keys:
        for name in settings.missing_api_keys:
            fail(f"{name}: NOT SET")
        return False

    ok("All provider keys set")
    ok(f"Weather TTL: {settings.weather_ttl_minutes} min | Restaurant TTL: {settings.restaurant_ttl_hours} h")
    ok(f"Staleness formula: {settings.staleness_formula}")
    return True


async def step2_test_geocoding(query: str):
    step_header(2, "Test Google Geocoding")
    from app.integrations import GeocodingClient

    info(f"Geocoding: {query!r}")
    try:
        candidates = await GeocodingClient().geocode(query)
    except ExplorerError as e:
        fail(str(e))
        return None

    first = candidates[0]
    ok(f"Got {len(candidates)} candidates, first: {first.formatted_address} ({first.lat}, {first.lng})")
    return first


async def step3_test_forecast(lat: float, lng: float) -> bool:
    step_header(3, "Test Dark Sky Forecast")
    from app.integrations import DarkSkyClient
    from app.services.weather_cache import display_day

    try:
        days = await DarkSkyClient().daily_forecast(lat, lng)
    except ExplorerError as e:
        fail(str(e))
        return False

    ok(f"Got {len(days)} days")
    for day in days[:3]:
        print(f"    - {display_day(day.time)}: {day.summary[:60]}")
    return True


async def step4_test_yelp(lat: float, lng: float) -> bool:
    step_header(4, "Test Yelp Business Search")
    from app.integrations import YelpClient

    try:
        businesses = await YelpClient().search_businesses(lat, lng)
    except ExplorerError as e:
        fail(str(e))
        return False

    ok(f"Got {len(businesses)} restaurants")
    for b in businesses[:3]:
        print(f"    - {b.name} ({b.price or '-'}, {b.rating})")
    return True


async def main(query: str) -> int:
    if not await step1_verify_env():
        return 1

    candidate = await step2_test_geocoding(query)
    if candidate is None:
        return 1

    results = [
        await step3_test_forecast(candidate.lat, candidate.lng),
        await step4_test_yelp(candidate.lat, candidate.lng),
    ]
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "Seattle, WA")))
