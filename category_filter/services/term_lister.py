"""
Term Lister.

Resolves the filtered, ordered list of terms a widget shows as buttons and
caches it in the Transient Store. Empty lists are cached for a shorter
time so a freshly created term shows up quickly.
"""

import json
import logging
from typing import List, Optional

from ..config.constants import (
    CACHE_VERSION_KEY,
    EMPTY_TERMS_CACHE_TTL_SECONDS,
    TERMS_CACHE_TTL_SECONDS,
    TERMS_KEY_PREFIX,
)
from ..config.settings import Settings, get_settings
from ..data_access.dynamodb_client import DynamoDBClient
from ..data_access.exceptions import DynamoDBError
from ..data_access.transient_store import TransientStore
from ..models.term import Term, TermQuery
from .content_repository import ContentRepository, RestContentRepository
from .fragment_cache import build_cache_key

logger = logging.getLogger(__name__)


def select_terms(terms: List[Term], query: TermQuery) -> List[Term]:
    """
    Filter and order terms.

    Args:
        terms: All terms of the taxonomy
        query: Include/exclude/hide_empty/ordering parameters

    Returns:
        Selected terms in display order
    """
    selected = [
        term for term in terms
        if (not query.include or term.id in query.include)
        and term.id not in query.exclude
        and (not query.hide_empty or term.count > 0)
    ]

    if query.orderby == 'name':
        sort_key = lambda term: (term.name.lower(), term.id)  # noqa: E731
    else:
        sort_key = lambda term: (getattr(term, query.orderby), term.id)  # noqa: E731

    return sorted(selected, key=sort_key, reverse=query.order == 'DESC')


class TermLister:
    """
    Cached term lookup for filter widgets.
    """

    def __init__(
        self,
        repository: ContentRepository,
        store: TransientStore,
        ttl_seconds: int = TERMS_CACHE_TTL_SECONDS,
        empty_ttl_seconds: int = EMPTY_TERMS_CACHE_TTL_SECONDS
    ):
        """
        Initialize Term Lister.

        Args:
            repository: Source of terms
            store: Transient Store for cached lists
            ttl_seconds: Lifetime of non-empty lists
            empty_ttl_seconds: Lifetime of empty lists
        """
        self.repository = repository
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.empty_ttl_seconds = empty_ttl_seconds

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'TermLister':
        """
        Build a lister reading terms from the REST API at CONTENT_API_URL.

        Args:
            settings: Settings to use, defaults to the global instance

        Returns:
            Configured TermLister
        """
        settings = settings or get_settings()
        return cls(
            repository=RestContentRepository(
                settings.content_api_url,
                timeout_seconds=settings.fetch_timeout_seconds
            ),
            store=TransientStore(
                settings.transients_table,
                DynamoDBClient(region=settings.aws_region)
            ),
            ttl_seconds=settings.terms_cache_ttl_seconds,
            empty_ttl_seconds=settings.empty_terms_cache_ttl_seconds,
        )

    def list_terms(self, query: TermQuery) -> List[Term]:
        """
        Terms for a widget, from cache when available.

        Args:
            query: Term query

        Returns:
            Ordered terms

        Raises:
            ContentRepositoryError: If terms cannot be loaded on a miss
        """
        key = self._cache_key(query)

        if key is not None:
            cached = self._lookup(key)
            if cached is not None:
                return cached

        terms = select_terms(self.repository.get_terms(query.taxonomy), query)

        if key is not None:
            ttl = self.ttl_seconds if terms else self.empty_ttl_seconds
            self._store(key, terms, ttl)

        return terms

    def _cache_key(self, query: TermQuery) -> Optional[str]:
        try:
            version = self.store.get_counter(CACHE_VERSION_KEY)
        except DynamoDBError as e:
            logger.warning(f"Cache version lookup failed, bypassing term cache: {e}")
            return None
        return build_cache_key(TERMS_KEY_PREFIX, query.cache_parts(), version)

    def _lookup(self, key: str) -> Optional[List[Term]]:
        try:
            raw = self.store.get(key)
        except DynamoDBError as e:
            logger.warning(f"Term cache lookup failed for {key}: {e}")
            return None

        if raw is None:
            return None

        try:
            return [Term.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError) as e:
            # Unreadable entry is a miss and gets overwritten
            logger.warning(f"Discarding corrupt term cache entry {key}: {e}")
            return None

    def _store(self, key: str, terms: List[Term], ttl_seconds: int) -> None:
        try:
            self.store.set(key, json.dumps([term.to_dict() for term in terms]), ttl_seconds)
        except DynamoDBError as e:
            logger.warning(f"Term cache store failed for {key}: {e}")
