"""
Utility for building standardized API Gateway responses.
"""
import json
from typing import Any, Dict, Optional

from ..models.filter_response import FilterResponse, FilterFailure

DEFAULT_HEADERS = {
    'Content-Type': 'application/json; charset=utf-8',
    'Cache-Control': 'no-store',
}


def build_response(result: FilterResponse) -> Dict[str, Any]:
    """
    Build an API Gateway response from a filter result.

    Args:
        result: FilterSuccess or FilterFailure

    Returns:
        API Gateway response dict
    """
    return {
        'statusCode': result.status_code,
        'headers': dict(DEFAULT_HEADERS),
        'body': json.dumps(result.to_payload()),
    }


def error_response(status_code: int, message: str, selector: Optional[str] = None) -> Dict[str, Any]:
    """
    Build error response.

    Args:
        status_code: HTTP status code
        message: Human-readable error message
        selector: Attempted selector, for extraction failures

    Returns:
        API Gateway response dict
    """
    return build_response(
        FilterFailure(message=message, status_code=status_code, selector=selector)
    )
