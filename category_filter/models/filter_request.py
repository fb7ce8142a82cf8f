"""
Filter request value object.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FilterRequest:
    """
    One click on a filter button, as received by the endpoint.

    Constructed per request and never persisted.

    Attributes:
        base_url: URL of the page whose listing is filtered
        replace_selector: Single class-or-id selector of the region to replace
        category_id: Selected term id (0 = unfiltered "All" state)
        page_id: Target page id (0 = default listing page)
    """

    base_url: str
    replace_selector: str
    category_id: int = 0
    page_id: int = 0

    def __post_init__(self):
        """Validate field constraints."""
        if self.category_id < 0:
            raise ValueError(f"category_id must be non-negative, got {self.category_id}")

        if self.page_id < 0:
            raise ValueError(f"page_id must be non-negative, got {self.page_id}")

    def cache_parts(self) -> Tuple[str, str, int, int]:
        """Ordered tuple the fragment cache key is derived from."""
        return (self.base_url, self.replace_selector, self.category_id, self.page_id)
