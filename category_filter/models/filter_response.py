"""
Filter endpoint response envelope.

A response is either a ``FilterSuccess`` or a ``FilterFailure``; both
serialize to the ``{success, data}`` envelope the client script expects.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class FilterSuccess:
    """
    Extracted fragment.

    Attributes:
        html: Inner HTML of the replaced region
        cached: True when served from the fragment cache (diagnostics only)
    """

    html: str
    cached: bool = False
    status_code: int = 200

    def to_payload(self) -> Dict[str, Any]:
        """Build the JSON envelope."""
        return {
            'success': True,
            'data': {
                'html': self.html,
                'cached': self.cached,
            },
        }


@dataclass(frozen=True)
class FilterFailure:
    """
    Failed filter request.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (400, 403, 422, 500)
        selector: Attempted selector, set for extraction failures
    """

    message: str
    status_code: int = 500
    selector: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Build the JSON envelope."""
        data: Dict[str, Any] = {'message': self.message}
        if self.selector is not None:
            data['selector'] = self.selector
        return {'success': False, 'data': data}


FilterResponse = Union[FilterSuccess, FilterFailure]
