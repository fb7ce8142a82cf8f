"""
Main content listing query as seen by the query interceptor.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ListingQuery:
    """
    The host's query for the posts listed on a page.

    Attributes:
        is_admin: True in the administrative context
        is_main_query: True for the primary query of the page
        is_posts_page: True when the page is the designated default listing
        page_id: Identifier of the queried page (0 when not a page)
        category_id: Category constraint, None when unconstrained
    """

    is_admin: bool = False
    is_main_query: bool = True
    is_posts_page: bool = False
    page_id: int = 0
    category_id: Optional[int] = None
