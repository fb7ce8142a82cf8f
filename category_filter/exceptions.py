"""
Custom exceptions for the category filter.

Every failure the filter endpoint can report maps to one of these types;
``status_code`` is the HTTP status the endpoint answers with.
"""
from typing import Optional


class CategoryFilterError(Exception):
    """Base exception for the category filter."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(CategoryFilterError):
    """Raised when required request fields are missing or malformed."""

    status_code = 400


class AuthFailureError(CategoryFilterError):
    """
    Raised when the anti-forgery token check fails.

    The request is rejected before any cache access or upstream fetch.
    """

    status_code = 403


class ExtractionFailedError(CategoryFilterError):
    """Raised when a fragment cannot be extracted with the given selector."""

    status_code = 422

    def __init__(self, message: str, selector: Optional[str] = None):
        super().__init__(message)
        self.selector = selector


class InvalidSelectorError(ExtractionFailedError):
    """Raised when the selector is not a single class or id selector."""
    pass


class SelectorNotFoundError(ExtractionFailedError):
    """Raised when no element in the page matches the selector."""
    pass


class UpstreamFetchError(CategoryFilterError):
    """
    Raised when the self-request fails at the transport level.

    This can occur due to:
    - Connection errors
    - The fetch timeout being exceeded
    - Invalid or unreachable URLs
    """
    pass


class EmptyUpstreamResponseError(CategoryFilterError):
    """Raised when the self-request returns an empty body."""
    pass


class ContentRepositoryError(CategoryFilterError):
    """Raised when terms cannot be loaded from the Content Repository."""
    pass
