"""
Self-request page fetcher.

Fetches the rendered page the filter widget sits on, with the filter query
parameters applied, so the host's own rendering pipeline produces the
filtered listing.
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from ..config.constants import (
    CATEGORY_QUERY_PARAM,
    FETCH_TIMEOUT_SECONDS,
    FILTER_REQUEST_HEADER,
    TARGET_PAGE_QUERY_PARAM,
)
from ..exceptions import EmptyUpstreamResponseError, UpstreamFetchError

logger = logging.getLogger(__name__)


def build_filter_url(base_url: str, category_id: int, page_id: int) -> str:
    """
    Derive the URL to fetch from the widget's base URL.

    The category parameter is present only when ``category_id > 0`` and the
    target-page parameter only when ``page_id > 0``; otherwise they are
    removed. Other query parameters are kept, the fragment is dropped.

    Args:
        base_url: Page URL
        category_id: Selected term id
        page_id: Target page id

    Returns:
        URL with the filter parameters applied
    """
    parts = urlsplit(base_url)
    params = [
        (name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
        if name not in (CATEGORY_QUERY_PARAM, TARGET_PAGE_QUERY_PARAM)
    ]

    if category_id > 0:
        params.append((CATEGORY_QUERY_PARAM, str(category_id)))
    if page_id > 0:
        params.append((TARGET_PAGE_QUERY_PARAM, str(page_id)))

    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), ''))


class PageFetcher:
    """
    Performs the self-request against the host site.

    No retries: a transport failure is reported to the caller as is.
    """

    def __init__(
        self,
        timeout_seconds: float = FETCH_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize page fetcher.

        Args:
            timeout_seconds: Connect and read timeout
            session: Optional requests session for testing/pooling
        """
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch(self, url: str) -> str:
        """
        GET the page and return its body.

        Args:
            url: Page URL with filter parameters applied

        Returns:
            Response body

        Raises:
            UpstreamFetchError: On connection errors and timeouts
            EmptyUpstreamResponseError: If the body is empty
        """
        try:
            response = self.session.get(
                url,
                timeout=self.timeout_seconds,
                headers={FILTER_REQUEST_HEADER: '1'},
            )
        except requests.RequestException as e:
            raise UpstreamFetchError(f'Failed to fetch page: {e}') from e

        if not 200 <= response.status_code < 300:
            # Error pages are still HTML; extraction decides what to do
            logger.warning(f"Self-request returned HTTP {response.status_code} for {url}")

        body = response.text
        if not body or not body.strip():
            raise EmptyUpstreamResponseError('Empty response from page request')

        return body
