# spielplan_api/cache.py
from __future__ import annotations

import time
from typing import Any, Dict, NamedTuple, Optional

# In-memory TTL cache for fetched league payloads (single-instance deploys).
# Each entry has a fresh window and a longer stale window; stale copies are
# only handed out as a fallback when a live fetch failed.


class _Entry(NamedTuple):
    fresh_until: float
    stale_until: float
    value: Any


_store: Dict[str, _Entry] = {}


def make_key(*parts: Any) -> str:
    """
    Join non-empty parts into a namespaced key.
    Example:
      make_key("source", "https://x/liga") -> "source:https://x/liga"
    """
    cleaned = [str(p).strip() for p in parts if str(p).strip()]
    if len(cleaned) < 2:
        raise ValueError("Cache key needs a namespace and at least one part")
    return ":".join(cleaned)


def _live_entry(key: str, now: float) -> Optional[_Entry]:
    entry = _store.get(key)
    if entry is None:
        return None
    if now > entry.stale_until:
        del _store[key]
        return None
    return entry


def get(key: str) -> Optional[Any]:
    """Value while it is still fresh, else None."""
    now = time.time()
    entry = _live_entry(key, now)
    if entry is None or now > entry.fresh_until:
        return None
    return entry.value


def get_stale(key: str) -> Optional[Any]:
    """Value within its stale window, fresh or not."""
    entry = _live_entry(key, time.time())
    return entry.value if entry is not None else None


def set(key: str, value: Any, ttl_seconds: int = 60, stale_ttl_seconds: int = 0) -> None:
    if ttl_seconds <= 0:
        return
    now = time.time()
    _store[key] = _Entry(
        fresh_until=now + ttl_seconds,
        stale_until=now + max(ttl_seconds, stale_ttl_seconds),
        value=value,
    )


def clear() -> None:
    _store.clear()


def debug_snapshot() -> Dict[str, Dict[str, float]]:
    """Remaining fresh/stale seconds per cached key."""
    now = time.time()
    return {
        k: {"fresh": max(0.0, e.fresh_until - now), "stale": max(0.0, e.stale_until - now)}
        for k, e in _store.items()
    }
