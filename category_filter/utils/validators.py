"""
Input validation utilities for filter request parameters.
"""
import re
from typing import Any, Optional, Tuple
from urllib.parse import urlparse

from ..config.constants import SELECTOR_PATTERN


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
        """
        super().__init__(message)
        self.field = field
        self.message = message


def validate_required(value: Optional[str], field_name: str) -> str:
    """
    Validate that a form field is present and non-empty.

    Args:
        value: Field value
        field_name: Name of the field for error messages

    Returns:
        The stripped value

    Raises:
        ValidationError: If the value is missing or blank
    """
    if value is None or not str(value).strip():
        raise ValidationError(f'{field_name} is required', field=field_name)
    return str(value).strip()


def is_valid_selector(selector: str) -> bool:
    """
    Check a selector against the single class-or-id pattern.

    Args:
        selector: Selector such as ".blog-wrap" or "#posts"

    Returns:
        True if the selector is a single class or id selector
    """
    return isinstance(selector, str) and re.fullmatch(SELECTOR_PATTERN, selector) is not None


def validate_base_url(base_url: str, site_url: str = '') -> None:
    """
    Validate the page URL the endpoint fetches.

    Args:
        base_url: URL of the page to fetch
        site_url: When set, base_url must have the same scheme and host

    Raises:
        ValidationError: If the URL is not http(s) or not same-origin
    """
    parsed = urlparse(base_url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValidationError(
            'base_url must be an absolute http(s) URL',
            field='base_url'
        )

    if site_url:
        site = urlparse(site_url)
        if (parsed.scheme, parsed.netloc.lower()) != (site.scheme, site.netloc.lower()):
            raise ValidationError(
                'base_url must belong to this site',
                field='base_url'
            )


def parse_non_negative_int(value: Any) -> int:
    """
    Parse an id-like form value.

    Non-numeric and negative values become 0.

    Args:
        value: Raw value (string, int or None)

    Returns:
        Non-negative integer
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return max(0, number)


def parse_id_list(value: Any) -> Tuple[int, ...]:
    """
    Parse a comma-separated id list such as "12, 14,22".

    Blank and non-numeric items are skipped.

    Args:
        value: Raw comma-separated string

    Returns:
        Tuple of positive ids in their original order
    """
    if not value:
        return ()

    ids = []
    for item in str(value).split(','):
        number = parse_non_negative_int(item)
        if number > 0:
            ids.append(number)
    return tuple(ids)
