"""
Filter widget options parsed from shortcode or page-builder attributes.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from .term import TermQuery
from ..utils.validators import parse_id_list, parse_non_negative_int


def _sanitize_key(value: Any) -> str:
    """Lowercase and keep only [a-z0-9_-]."""
    return re.sub(r'[^a-z0-9_\-]', '', str(value).lower())


def _parse_flag(value: Any) -> bool:
    return parse_non_negative_int(value) > 0


@dataclass(frozen=True)
class WidgetOptions:
    """
    Configuration of one filter widget instance.

    Attributes:
        base_url: URL of the page whose listing is filtered
        replace_selector: Selector of the region replaced on click
        page_id: Target page id (0 = default listing page)
        taxonomy: Taxonomy the buttons are built from
        include: Only show these term ids
        exclude: Hide these term ids
        hide_empty: Hide terms without posts
        orderby: Button ordering field
        order: ASC or DESC
        show_all: Render the "All" button
        all_label: Label of the "All" button
    """

    base_url: str = ''
    replace_selector: str = '.blog-wrap'
    page_id: int = 0
    taxonomy: str = 'category'
    include: Tuple[int, ...] = field(default_factory=tuple)
    exclude: Tuple[int, ...] = field(default_factory=tuple)
    hide_empty: bool = True
    orderby: str = 'name'
    order: str = 'ASC'
    show_all: bool = True
    all_label: str = 'All'

    @classmethod
    def from_attributes(cls, raw: Mapping[str, Any]) -> 'WidgetOptions':
        """
        Build options from raw attributes, applying defaults.

        Unknown attributes are ignored.

        Args:
            raw: Attribute mapping as written in the shortcode/builder

        Returns:
            Sanitized WidgetOptions
        """
        defaults = cls()

        def get(name: str, default: Any) -> Any:
            value = raw.get(name)
            return default if value is None else value

        return cls(
            base_url=str(get('base_url', defaults.base_url)).strip(),
            replace_selector=str(get('replace_selector', defaults.replace_selector)).strip(),
            page_id=parse_non_negative_int(get('page_id', defaults.page_id)),
            taxonomy=_sanitize_key(get('taxonomy', defaults.taxonomy)) or defaults.taxonomy,
            include=parse_id_list(raw.get('include')),
            exclude=parse_id_list(raw.get('exclude')),
            hide_empty=_parse_flag(get('hide_empty', 1)),
            orderby=_sanitize_key(get('orderby', defaults.orderby)),
            order=str(get('order', defaults.order)),
            show_all=_parse_flag(get('show_all', 1)),
            all_label=str(get('all_label', defaults.all_label)).strip() or defaults.all_label,
        )

    def term_query(self) -> TermQuery:
        """Term lookup matching these options."""
        return TermQuery(
            taxonomy=self.taxonomy,
            include=self.include,
            exclude=self.exclude,
            hide_empty=self.hide_empty,
            orderby=self.orderby,
            order=self.order,
        )
