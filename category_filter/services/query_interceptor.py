"""
Query Interceptor.

Constrains the main listing query of a page to the category named in the
request's query string. This is what makes the filter endpoint's
self-request return filtered content: the request goes through the same
rendering pipeline as an ordinary page load.
"""

import dataclasses
import logging
from typing import Mapping, Optional

from ..config.constants import CATEGORY_QUERY_PARAM, TARGET_PAGE_QUERY_PARAM
from ..models.listing_query import ListingQuery
from ..utils.validators import parse_non_negative_int

logger = logging.getLogger(__name__)


def is_target_page(query: ListingQuery, target_page_id: int) -> bool:
    """
    Whether the filter applies to the page being rendered.

    Args:
        query: Listing query of the page
        target_page_id: Value of the target-page parameter (0 if absent)

    Returns:
        True for the default listing page, or for the page whose id matches
        an explicitly supplied target page
    """
    if query.is_posts_page:
        return True
    return target_page_id > 0 and query.page_id == target_page_id


def intercept_listing_query(
    query: ListingQuery,
    query_params: Mapping[str, str]
) -> ListingQuery:
    """
    Apply the category filter to the page's main listing query.

    Args:
        query: Listing query about to run
        query_params: Query-string parameters of the current request

    Returns:
        The query constrained to the requested category, or the query
        unchanged when it is an admin/secondary query, no positive
        category is requested, or the page is not the filter's target
    """
    if query.is_admin or not query.is_main_query:
        return query

    category_id = parse_non_negative_int(query_params.get(CATEGORY_QUERY_PARAM))
    if category_id <= 0:
        return query

    target_page_id = parse_non_negative_int(query_params.get(TARGET_PAGE_QUERY_PARAM))
    if not is_target_page(query, target_page_id):
        return query

    logger.debug(f"Constraining listing of page {query.page_id} to category {category_id}")
    return dataclasses.replace(query, category_id=category_id)


def requested_category(query_params: Mapping[str, str]) -> Optional[int]:
    """
    Category requested in the query string, for rendering the active button.

    Args:
        query_params: Query-string parameters

    Returns:
        Positive category id, or None for the unfiltered listing
    """
    category_id = parse_non_negative_int(query_params.get(CATEGORY_QUERY_PARAM))
    return category_id or None
