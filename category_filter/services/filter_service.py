"""
Filter Endpoint core.

Turns one filter request into the inner HTML of the page region the widget
replaces: anti-forgery check, validation, fragment cache lookup, and on a
miss a self-request of the page followed by extraction.
"""

from typing import Mapping, Optional, Tuple

from ..config.constants import FILTER_ACTION, NONCE_ACTION
from ..exceptions import (
    BadRequestError,
    CategoryFilterError,
    ExtractionFailedError,
)
from ..models.filter_request import FilterRequest
from ..models.filter_response import FilterFailure, FilterResponse, FilterSuccess
from ..utils.metrics_emitter import MetricsEmitter
from ..utils.structured_logger import LoggingContext, StructuredLogger, get_structured_logger
from ..utils.validators import (
    ValidationError,
    parse_non_negative_int,
    validate_base_url,
    validate_required,
)
from .fragment_cache import FragmentCache
from .fragment_extractor import extract_fragment, validate_selector
from .nonce_service import NonceService
from .page_fetcher import PageFetcher, build_filter_url


class FilterService:
    """
    Serves ``scf_get_blog_html`` requests.

    Each call is independent; the only shared state is the fragment cache.
    """

    def __init__(
        self,
        nonce_service: NonceService,
        fragment_cache: FragmentCache,
        page_fetcher: PageFetcher,
        site_url: str = '',
        metrics: Optional[MetricsEmitter] = None
    ):
        """
        Initialize filter service.

        Args:
            nonce_service: Anti-forgery token verifier
            fragment_cache: Cache of extracted fragments
            page_fetcher: Self-request client
            site_url: When set, base_url must be on this origin
            metrics: Optional metrics emitter
        """
        self.nonce_service = nonce_service
        self.fragment_cache = fragment_cache
        self.page_fetcher = page_fetcher
        self.site_url = site_url
        self.metrics = metrics or MetricsEmitter(enabled=False)

    def handle(
        self,
        form: Mapping[str, str],
        request_id: Optional[str] = None
    ) -> FilterResponse:
        """
        Handle one filter request.

        Args:
            form: Decoded form fields (action, nonce, base_url,
                replace_selector, cat_id, page_id)
            request_id: Correlation id for logging

        Returns:
            FilterSuccess or FilterFailure
        """
        logger = get_structured_logger('FilterService', request_id=request_id)

        try:
            self.nonce_service.verify(form.get('nonce'), NONCE_ACTION)
            request = self.parse_request(form)
            html, cached = self.get_fragment(request, logger)
        except CategoryFilterError as e:
            logger.warning(
                f'Filter request failed: {e.message}',
                operation='filter',
                error_type=type(e).__name__,
                status_code=e.status_code
            )
            self.metrics.emit_error(type(e).__name__)
            return FilterFailure(
                message=e.message,
                status_code=e.status_code,
                selector=getattr(e, 'selector', None)
            )

        return FilterSuccess(html=html, cached=cached)

    def parse_request(self, form: Mapping[str, str]) -> FilterRequest:
        """
        Validate form fields and build the request value object.

        Args:
            form: Decoded form fields

        Returns:
            FilterRequest

        Raises:
            BadRequestError: On a wrong action, missing fields or a
                foreign base_url
            InvalidSelectorError: If the selector is not a single class or id
        """
        action = form.get('action')
        if action is not None and action != FILTER_ACTION:
            raise BadRequestError(f'Unknown action: {action}')

        try:
            base_url = validate_required(form.get('base_url'), 'base_url')
            validate_required(form.get('replace_selector'), 'replace_selector')
        except ValidationError as e:
            raise BadRequestError('Missing base_url or replace_selector') from e

        # Unstripped: surrounding whitespace makes a selector invalid
        replace_selector = form['replace_selector']
        validate_selector(replace_selector)

        try:
            validate_base_url(base_url, self.site_url)
        except ValidationError as e:
            raise BadRequestError(e.message) from e

        return FilterRequest(
            base_url=base_url,
            replace_selector=replace_selector,
            category_id=parse_non_negative_int(form.get('cat_id')),
            page_id=parse_non_negative_int(form.get('page_id')),
        )

    def get_fragment(
        self,
        request: FilterRequest,
        logger: StructuredLogger
    ) -> Tuple[str, bool]:
        """
        Fragment for a validated request, from cache or freshly extracted.

        Args:
            request: Validated filter request
            logger: Request-scoped logger

        Returns:
            Tuple of (html, served_from_cache)
        """
        parts = request.cache_parts()
        key = self.fragment_cache.cache_key(parts)
        logger.cache_key = key

        logger.info(
            'Filter request received',
            operation='filter',
            base_url=request.base_url,
            replace_selector=request.replace_selector,
            category_id=request.category_id,
            page_id=request.page_id
        )

        def compute() -> str:
            url = build_filter_url(request.base_url, request.category_id, request.page_id)
            with LoggingContext(logger, 'fetch_page', url=url) as timing:
                body = self.page_fetcher.fetch(url)
            self.metrics.emit_fetch_latency(timing.duration_ms)
            logger.log_performance('fetch_page', timing.duration_ms, body_bytes=len(body))

            try:
                return extract_fragment(body, request.replace_selector)
            except ExtractionFailedError:
                logger.warning(
                    'Replace selector not found in fetched page',
                    operation='extract',
                    url=url,
                    replace_selector=request.replace_selector
                )
                raise

        html, cached = self.fragment_cache.get_or_compute(parts, compute, key=key)

        logger.log_cache_result('fragment', cached)
        self.metrics.emit_cache_result(cached)
        logger.info(
            'Filter request served',
            operation='filter',
            cached=cached,
            html_bytes=len(html)
        )
        return html, cached
