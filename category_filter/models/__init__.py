"""
Data models for the category filter.

This module provides dataclasses for terms, filter requests and responses,
listing queries and the per-render widget state.
"""

from .term import Term, TermQuery
from .filter_request import FilterRequest
from .filter_response import FilterResponse, FilterSuccess, FilterFailure
from .listing_query import ListingQuery
from .render_context import RenderContext
from .widget_options import WidgetOptions

__all__ = [
    'Term',
    'TermQuery',
    'FilterRequest',
    'FilterResponse',
    'FilterSuccess',
    'FilterFailure',
    'ListingQuery',
    'RenderContext',
    'WidgetOptions',
]
