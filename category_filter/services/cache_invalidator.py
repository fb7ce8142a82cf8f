"""
Cache invalidation on content mutations.

Fragment and term-list keys embed the cache version counter, so bumping
the counter makes every stored entry unreachable. Unreachable entries are
removed by the table's TTL.
"""

import logging

from ..config.constants import CACHE_VERSION_KEY, CONTENT_MUTATION_EVENTS
from ..data_access.transient_store import TransientStore

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Bumps the cache version when posts or terms change."""

    def __init__(self, store: TransientStore):
        """
        Initialize cache invalidator.

        Args:
            store: Transient Store holding the version counter
        """
        self.store = store

    @staticmethod
    def is_mutation_event(event_type: str) -> bool:
        """Whether an event type invalidates cached fragments and terms."""
        return event_type in CONTENT_MUTATION_EVENTS

    def bump(self) -> int:
        """
        Invalidate all cached fragments and term lists.

        Returns:
            New cache version
        """
        version = self.store.increment_counter(CACHE_VERSION_KEY)
        logger.info(f"Cache version bumped to {version}")
        return version
