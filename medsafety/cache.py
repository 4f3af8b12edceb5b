"""
Memo stores for remote label lookups.

Two layers: an HTTP response cache on the openFDA session (requests-cache),
and in-process memos of parsed results keyed by case-folded drug name
(cachetools). Empty results are memoized like any other value so failing
lookups are not retried on every evaluation.
"""

import logging
import time
from typing import Callable, Optional

import requests_cache
from cachetools import Cache, LRUCache, TTLCache

# Set up logging
logger = logging.getLogger(__name__)

def make_memo(maxsize: int = 512, ttl: Optional[float] = None,
              timer: Callable[[], float] = time.monotonic) -> Cache:
    """
    Bounded memo store: least recently used entries are evicted first, and
    entries expire after ``ttl`` seconds when a ttl is given
    """
    if maxsize <= 0:
        raise ValueError("maxsize must be positive")
    if ttl is not None and ttl <= 0:
        raise ValueError("ttl must be positive or None")

    if ttl is None:
        return LRUCache(maxsize=maxsize)
    return TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

def cached_session(ttl: Optional[float] = None) -> requests_cache.CachedSession:
    """
    In-memory HTTP cache for label queries; -1 keeps responses for the
    process lifetime
    """
    expire_after = ttl if ttl is not None else -1
    logger.debug(f"Creating openFDA response cache (expire_after={expire_after})")
    return requests_cache.CachedSession(backend="memory", expire_after=expire_after)
