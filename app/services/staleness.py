"""Cache-group age arithmetic.

Two formulas are supported:
  - elapsed: (now - created_at) / unit        (default)
  - legacy:  now - created_at / unit          (only created_at is converted)

With real epoch-millisecond timestamps the legacy formula is always far
above any threshold, so every cached group reads as stale.
"""

import time

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def cache_age(created_at: int, now: int, unit_ms: int, formula: str = "elapsed") -> float:
    """Age of a cache group in the category's unit."""
    if formula == "legacy":
        return now - created_at / unit_ms
    if formula == "elapsed":
        return (now - created_at) / unit_ms
    raise ValueError(f"Unknown staleness formula: {formula!r}")


def is_stale(created_at: int, now: int, unit_ms: int, threshold: float, formula: str = "elapsed") -> bool:
    return cache_age(created_at, now, unit_ms, formula) > threshold
