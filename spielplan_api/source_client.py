# spielplan_api/source_client.py
# Proxy fetch for league payloads; owns network errors, caching and the latest-request guard.
from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote, urlsplit

import requests

from spielplan_api.cache import (
    get as cache_get,
    get_stale as cache_get_stale,
    make_key as cache_key,
    set as cache_set,
)
from spielplan_api.config import (
    PROXY_ORIGIN,
    SOURCE_CACHE_TTL_SECONDS,
    SOURCE_STALE_TTL_SECONDS,
    SOURCE_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class SourceFetchError(Exception):
    """Raised when the proxy fetch fails or returns something that is not JSON."""
    pass


class FetchSequence:
    """
    Monotonic request counter.

    Every fetch takes a ticket; only the result belonging to the most recently
    issued ticket is accepted, older ones are dropped.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._latest

    def accept(self, ticket: int, result: Any) -> Optional[Any]:
        if not self.is_current(ticket):
            logger.debug("Discarding result of superseded fetch #%s", ticket)
            return None
        return result


def build_proxy_url(url: str, proxy_origin: str = PROXY_ORIGIN) -> str:
    """
    League page URL -> proxy URL returning its JSON data.
      https://liga.example/x/y -> {proxy}/proxy?url=https%3A%2F%2Fliga.example%2F%2Fx%2Fy%2F%3F_data
    """
    if not url or not url.strip():
        raise SourceFetchError("No URL provided")

    parts = urlsplit(url.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise SourceFetchError(f"Invalid source URL: {url}")

    # same concatenation the block used (origin + "/" + pathname), double slash included
    target = f"{parts.scheme}://{parts.netloc}/{parts.path or '/'}/?_data"
    return f"{proxy_origin.rstrip('/')}/proxy?url={quote(target, safe='')}"


def _discarded(sequence: Optional[FetchSequence], ticket: Optional[int], cancel: Optional[threading.Event]) -> bool:
    if cancel is not None and cancel.is_set():
        return True
    return sequence is not None and not sequence.is_current(ticket)


def fetch_dataset(
    url: str,
    *,
    sequence: Optional[FetchSequence] = None,
    cancel: Optional[threading.Event] = None,
) -> Optional[Dict[str, Any]]:
    """
    Fetch a league payload ({"data": ...}) through the proxy.

    Returns None (no error) when the fetch was cancelled via `cancel` or was
    superseded by a newer fetch on the same `sequence`, whatever the outcome
    of the request itself.
    """
    proxy_url = build_proxy_url(url)
    ticket = sequence.issue() if sequence is not None else None

    logger.info("Fetching league data via proxy: %s", url)
    try:
        resp = requests.get(proxy_url, timeout=SOURCE_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        if _discarded(sequence, ticket, cancel):
            return None
        raise SourceFetchError(f"Network error: {e}") from e

    if resp.status_code != 200:
        if _discarded(sequence, ticket, cancel):
            return None
        raise SourceFetchError(f"HTTP {resp.status_code}: {resp.reason or 'Fetch failed'}")

    try:
        data = resp.json()
    except ValueError as e:
        if _discarded(sequence, ticket, cancel):
            return None
        raise SourceFetchError(f"Invalid JSON response: {e}") from e

    if cancel is not None and cancel.is_set():
        logger.debug("Fetch cancelled: %s", url)
        return None
    if sequence is not None:
        return sequence.accept(ticket, data)
    return data


def fetch_dataset_cached(url: str) -> Tuple[Dict[str, Any], bool, Optional[str]]:
    """
    Cache-first fetch with fresh/stale fallback.
    Returns (payload, stale, error_message_if_stale).
    """
    key = cache_key("source", url.strip())

    cached = cache_get(key)
    if cached is not None:
        return cached, False, None

    try:
        data = fetch_dataset(url)
    except SourceFetchError as e:
        stale = cache_get_stale(key)
        if stale is not None:
            logger.warning("Fetch failed for %s, serving cached data: %s", url, e)
            return stale, True, str(e)
        raise

    cache_set(key, data, ttl_seconds=SOURCE_CACHE_TTL_SECONDS, stale_ttl_seconds=SOURCE_STALE_TTL_SECONDS)
    return data, False, None
