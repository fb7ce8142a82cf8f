"""
HTTP API Lambda handler for the category filter endpoint.

POST /filter with a form-encoded body:
- action: scf_get_blog_html
- nonce: anti-forgery token issued with the page
- base_url, replace_selector, cat_id, page_id

Responds with {success, data} JSON: the inner HTML of the replaced region
on success, a message (and the selector for extraction failures) otherwise.
"""
import base64
import json
import os
import sys
from typing import Any, Dict, Optional
from urllib.parse import parse_qs

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from category_filter.config.settings import get_settings
from category_filter.config.constants import METRICS_NAMESPACE
from category_filter.data_access.dynamodb_client import DynamoDBClient
from category_filter.data_access.transient_store import TransientStore
from category_filter.services.filter_service import FilterService
from category_filter.services.fragment_cache import FragmentCache
from category_filter.services.nonce_service import NonceService
from category_filter.services.page_fetcher import PageFetcher
from category_filter.utils.metrics_emitter import MetricsEmitter
from category_filter.utils.response_builder import build_response, error_response
from category_filter.utils.structured_logger import (
    configure_lambda_logging,
    get_structured_logger,
)

configure_lambda_logging()
logger = get_structured_logger('FilterHandler')

# Reused across invocations of a warm container
_filter_service: Optional[FilterService] = None


def get_filter_service() -> FilterService:
    """Get or create the filter service from settings."""
    global _filter_service
    if _filter_service is None:
        settings = get_settings()
        store = TransientStore(
            settings.transients_table,
            DynamoDBClient(region=settings.aws_region)
        )
        _filter_service = FilterService(
            nonce_service=NonceService(
                settings.nonce_secret,
                settings.nonce_lifetime_seconds
            ),
            fragment_cache=FragmentCache(store, settings.fragment_cache_ttl_seconds),
            page_fetcher=PageFetcher(timeout_seconds=settings.fetch_timeout_seconds),
            site_url=settings.site_url,
            metrics=MetricsEmitter(
                namespace=METRICS_NAMESPACE,
                enabled=settings.enable_metrics
            ),
        )
    return _filter_service


def parse_form(event: Dict[str, Any]) -> Dict[str, str]:
    """
    Decode the request body into form fields.

    Accepts application/x-www-form-urlencoded (the client script's format)
    and JSON objects. Repeated form fields keep their first value.

    Args:
        event: API Gateway HTTP API event

    Returns:
        Field name -> value

    Raises:
        ValueError: If the body cannot be decoded
    """
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')

    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    content_type = headers.get('content-type', '')

    if 'application/json' in content_type:
        data = json.loads(body or '{}')
        if not isinstance(data, dict):
            raise ValueError('JSON body must be an object')
        return {k: '' if v is None else str(v) for k, v in data.items()}

    return {k: v[0] for k, v in parse_qs(body, keep_blank_values=True).items()}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handle one filter request.

    Args:
        event: API Gateway HTTP API (payload v2) event
        context: Lambda context

    Returns:
        API Gateway response dict
    """
    request_context = event.get('requestContext') or {}
    request_id = request_context.get('requestId')
    method = (request_context.get('http') or {}).get('method', 'POST')

    if method != 'POST':
        return error_response(405, 'Method not allowed')

    service = None
    try:
        form = parse_form(event)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning('Malformed request body', operation='parse_form', error=str(e))
        return error_response(400, 'Malformed request body')

    try:
        service = get_filter_service()
        result = service.handle(form, request_id=request_id)
        return build_response(result)

    except Exception as e:
        logger.error(
            f'Unhandled error: {str(e)}',
            operation='filter',
            error=e,
            exc_info=True,
            request_id=request_id
        )
        return error_response(500, 'Internal server error')

    finally:
        if service is not None:
            service.metrics.flush()
