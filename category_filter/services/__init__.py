"""
Services: fragment extraction and caching, the filter endpoint core,
query interception, term listing and widget rendering.
"""

from .cache_invalidator import CacheInvalidator
from .content_repository import ContentRepository, RestContentRepository
from .filter_service import FilterService
from .fragment_cache import FragmentCache, build_cache_key
from .fragment_extractor import extract_fragment, validate_selector
from .nonce_service import NonceService
from .page_fetcher import PageFetcher, build_filter_url
from .query_interceptor import intercept_listing_query, requested_category
from .term_lister import TermLister, select_terms
from .widget_renderer import (
    builder_element_definition,
    finalize_assets,
    render_filter_widget,
    render_shortcode,
)

__all__ = [
    'CacheInvalidator',
    'ContentRepository',
    'RestContentRepository',
    'FilterService',
    'FragmentCache',
    'build_cache_key',
    'extract_fragment',
    'validate_selector',
    'NonceService',
    'PageFetcher',
    'build_filter_url',
    'intercept_listing_query',
    'requested_category',
    'TermLister',
    'select_terms',
    'builder_element_definition',
    'finalize_assets',
    'render_filter_widget',
    'render_shortcode',
]
