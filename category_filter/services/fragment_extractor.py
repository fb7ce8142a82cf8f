"""
Fragment Extractor.

Locates the first element matching a single class or id selector in a
rendered page and returns its inner HTML. Only ``.name`` and ``#name``
selectors are supported; anything else is rejected before parsing.
"""

import warnings

from bs4 import BeautifulSoup

from ..exceptions import InvalidSelectorError, SelectorNotFoundError
from ..utils.validators import is_valid_selector


def validate_selector(selector: str) -> None:
    """
    Reject anything but a single class or id selector.

    Args:
        selector: Selector to check

    Raises:
        InvalidSelectorError: If the selector does not match the pattern
    """
    if not is_valid_selector(selector):
        raise InvalidSelectorError(
            f'Invalid replace selector: {selector!r}. '
            f'Use a single class (.name) or id (#name) selector.',
            selector=selector
        )


def extract_fragment(html: str, selector: str) -> str:
    """
    Return the inner HTML of the first element matching ``selector``.

    A class selector matches the first element carrying the class as a
    whole token (``.blog-wrap`` does not match ``blog-wrap-outer``). An id
    selector matches the first element whose id equals the name exactly.
    Malformed markup is tolerated and parser warnings are suppressed.

    Args:
        html: Full rendered page
        selector: ".name" or "#name"

    Returns:
        Serialized child nodes of the matched element, without the
        element's own tags

    Raises:
        InvalidSelectorError: If the selector is not a single class or id
        SelectorNotFoundError: If no element matches
    """
    validate_selector(selector)

    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        soup = BeautifulSoup(html or '', 'html.parser')

    name = selector[1:]
    if selector.startswith('.'):
        element = soup.find(class_=name)
    else:
        element = soup.find(id=name)

    if element is None:
        raise SelectorNotFoundError(
            f'Replace selector not found in page: {selector}',
            selector=selector
        )

    return element.decode_contents()
