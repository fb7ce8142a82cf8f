"""
Content event handler for cache invalidation.

Triggered by EventBridge rules on source ``content-repository``. Post and
term mutations bump the cache version, which retires every cached fragment
and term list at once. Other events are acknowledged and ignored.
"""
import os
import sys
from typing import Any, Dict, Optional

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from category_filter.config.settings import get_settings
from category_filter.data_access.dynamodb_client import DynamoDBClient
from category_filter.data_access.exceptions import DynamoDBError
from category_filter.data_access.transient_store import TransientStore
from category_filter.services.cache_invalidator import CacheInvalidator
from category_filter.utils.structured_logger import (
    configure_lambda_logging,
    get_structured_logger,
)

configure_lambda_logging()
logger = get_structured_logger('ContentEventHandler')

_invalidator: Optional[CacheInvalidator] = None


def get_invalidator() -> CacheInvalidator:
    """Get or create the cache invalidator."""
    global _invalidator
    if _invalidator is None:
        settings = get_settings()
        _invalidator = CacheInvalidator(
            TransientStore(
                settings.transients_table,
                DynamoDBClient(region=settings.aws_region)
            )
        )
    return _invalidator


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handle one content event.

    Args:
        event: EventBridge event
        context: Lambda context

    Returns:
        Status dict with the new cache version when one was issued

    Raises:
        DynamoDBError: If the version cannot be bumped, so EventBridge retries
    """
    event_type = event.get('detail-type', '')
    event_id = event.get('id')

    if not CacheInvalidator.is_mutation_event(event_type):
        logger.debug(
            f'Ignoring event: {event_type}',
            operation='content_event',
            event_id=event_id
        )
        return {'statusCode': 200, 'invalidated': False}

    try:
        version = get_invalidator().bump()
    except DynamoDBError as e:
        logger.error(
            'Failed to bump cache version',
            operation='content_event',
            error=e,
            event_type=event_type,
            event_id=event_id
        )
        raise

    logger.info(
        f'Cache invalidated by {event_type}',
        operation='content_event',
        event_id=event_id,
        cache_version=version
    )
    return {'statusCode': 200, 'invalidated': True, 'cacheVersion': version}
