"""
Fragment Cache.

Memoizes extracted fragments in the Transient Store, keyed by a hash of the
ordered request tuple and the current cache version.
"""

import hashlib
import json
import logging
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ..config.constants import (
    CACHE_VERSION_KEY,
    FRAGMENT_CACHE_TTL_SECONDS,
    FRAGMENT_KEY_PREFIX,
)
from ..data_access.exceptions import DynamoDBError
from ..data_access.transient_store import TransientStore

logger = logging.getLogger(__name__)

# Marks a get_or_compute call without a precomputed key
_NO_KEY = object()


def build_cache_key(prefix: str, parts: Sequence[Any], version: int = 0) -> str:
    """
    Generate cache key: {prefix}:v{version}:{hash32}.

    Args:
        prefix: Key namespace ('fragment', 'terms')
        parts: Ordered values identifying the cached computation
        version: Cache version stamp

    Returns:
        Cache key string
    """
    payload = json.dumps(list(parts), separators=(',', ':'), sort_keys=True)
    hash32 = hashlib.sha256(payload.encode('utf-8')).hexdigest()[:32]
    return f"{prefix}:v{version}:{hash32}"


class FragmentCache:
    """
    Cache of extracted fragments with TTL expiry.

    Failures of the compute callable are never stored. Concurrent misses on
    the same key may both compute; the last write wins.
    """

    def __init__(
        self,
        store: TransientStore,
        ttl_seconds: int = FRAGMENT_CACHE_TTL_SECONDS
    ):
        """
        Initialize Fragment Cache.

        Args:
            store: Transient Store backing the cache
            ttl_seconds: Lifetime of stored fragments
        """
        self.store = store
        self.ttl_seconds = ttl_seconds

        self._cache_hits = 0
        self._cache_misses = 0

    def cache_key(self, parts: Sequence[Any]) -> Optional[str]:
        """
        Key for the given request tuple under the current cache version.

        Args:
            parts: Ordered (base_url, selector, category_id, page_id)

        Returns:
            Cache key string, or None when the cache version is unreadable
        """
        version = self._current_version()
        if version is None:
            return None
        return build_cache_key(FRAGMENT_KEY_PREFIX, parts, version)

    def get_or_compute(
        self,
        parts: Sequence[Any],
        compute: Callable[[], str],
        key: Any = _NO_KEY
    ) -> Tuple[str, bool]:
        """
        Return the cached fragment or compute and store it.

        When no key can be built, or the caller passes ``key=None``, the
        cache is bypassed: the fragment is computed and not stored.

        Args:
            parts: Ordered (base_url, selector, category_id, page_id)
            compute: Produces the fragment; exceptions propagate and
                nothing is stored
            key: Precomputed cache key for ``parts``; None bypasses the
                cache without another version lookup

        Returns:
            Tuple of (html, served_from_cache)
        """
        if key is _NO_KEY:
            key = self.cache_key(parts)
        if key is None:
            self._cache_misses += 1
            return compute(), False

        cached = self._lookup(key)
        if cached is not None:
            self._cache_hits += 1
            return cached, True

        self._cache_misses += 1
        html = compute()
        self._store(key, html)
        return html, False

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get current cache statistics.

        Returns:
            Dictionary with cache hits, misses, and hit rate
        """
        total_requests = self._cache_hits + self._cache_misses
        hit_rate = (self._cache_hits / total_requests) if total_requests > 0 else 0

        return {
            'cache_hits': self._cache_hits,
            'cache_misses': self._cache_misses,
            'total_requests': total_requests,
            'hit_rate': hit_rate,
        }

    def _current_version(self) -> Optional[int]:
        try:
            return self.store.get_counter(CACHE_VERSION_KEY)
        except DynamoDBError as e:
            logger.warning(f"Cache version lookup failed, bypassing cache: {e}")
            return None

    def _lookup(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except DynamoDBError as e:
            # Store outage degrades to uncached operation
            logger.warning(f"Fragment cache lookup failed for {key}: {e}")
            return None

    def _store(self, key: str, html: str) -> None:
        try:
            self.store.set(key, html, self.ttl_seconds)
        except DynamoDBError as e:
            logger.warning(f"Fragment cache store failed for {key}: {e}")
