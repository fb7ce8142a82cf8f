"""
Content Repository access.

The taxonomy/content store belongs to the host CMS. ``ContentRepository``
is the interface the term lister depends on; ``RestContentRepository``
reads terms from the host's REST API.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import requests

from ..config.constants import FETCH_TIMEOUT_SECONDS
from ..exceptions import ContentRepositoryError
from ..models.term import Term

logger = logging.getLogger(__name__)

# Taxonomy name -> REST collection
TAXONOMY_ROUTES: Dict[str, str] = {
    'category': 'categories',
    'post_tag': 'tags',
}


class ContentRepository(ABC):
    """Source of taxonomy terms."""

    @abstractmethod
    def get_terms(self, taxonomy: str) -> List[Term]:
        """
        Return every term of a taxonomy.

        Args:
            taxonomy: Taxonomy name

        Returns:
            Terms in repository order

        Raises:
            ContentRepositoryError: If the taxonomy is unknown or the
                repository cannot be read
        """


class RestContentRepository(ContentRepository):
    """
    Reads terms from ``{api_url}/wp/v2/{collection}``, following pagination.
    """

    PER_PAGE = 100

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = FETCH_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize REST content repository.

        Args:
            api_url: REST root, e.g. https://example.com/wp-json
            timeout_seconds: Per-request timeout
            session: Optional requests session for testing/pooling
        """
        self.api_url = api_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def get_terms(self, taxonomy: str) -> List[Term]:
        collection = TAXONOMY_ROUTES.get(taxonomy)
        if collection is None:
            raise ContentRepositoryError(f'Taxonomy not found: {taxonomy}')

        url = f'{self.api_url}/wp/v2/{collection}'
        terms: List[Term] = []
        page = 1
        total_pages = 1

        while page <= total_pages:
            try:
                response = self.session.get(
                    url,
                    params={'per_page': self.PER_PAGE, 'page': page},
                    timeout=self.timeout_seconds,
                )
                response.raise_for_status()
                items = response.json()
            except (requests.RequestException, ValueError) as e:
                logger.error(f"Failed to load {taxonomy} terms page {page}: {e}")
                raise ContentRepositoryError(f'Could not load categories: {e}') from e

            terms.extend(Term.from_dict(item) for item in items)
            total_pages = int(response.headers.get('X-WP-TotalPages', 1) or 1)
            page += 1

        logger.info(f"Loaded {len(terms)} {taxonomy} terms from {url}")
        return terms
