"""Shared GET-and-decode helper for the provider clients."""

import logging
import time
from typing import Any

import httpx

from app.exceptions import ProviderUnavailable

logger = logging.getLogger(__name__)


async def get_json(
    provider: str,
    url: str,
    *,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 30,
) -> tuple[Any, int]:
    """GET a provider endpoint once. Returns (decoded body, elapsed ms).

    Raises ProviderUnavailable on transport errors, timeouts, non-2xx
    statuses and non-JSON bodies.
    """
    start = time.monotonic()
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(url, params=params, headers=headers)
    except httpx.TimeoutException as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.warning("%s timeout | %dms", provider, elapsed_ms)
        raise ProviderUnavailable(provider, "timeout") from e
    except httpx.HTTPError as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.error("%s error | %dms | %s", provider, elapsed_ms, str(e)[:200])
        raise ProviderUnavailable(provider, str(e)[:200]) from e

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if not resp.is_success:
        logger.warning("%s | status=%d | %dms", provider, resp.status_code, elapsed_ms)
        raise ProviderUnavailable(provider, f"HTTP {resp.status_code}", resp.status_code)

    try:
        return resp.json(), elapsed_ms
    except ValueError as e:
        logger.error("%s | invalid JSON | %dms", provider, elapsed_ms)
        raise ProviderUnavailable(provider, "invalid JSON body", resp.status_code) from e
