"""
Filter widget rendering.

Produces the button bar markup for a page, the page-builder element
definition, and the script/style tags, which are emitted only for pages
that actually contain a widget.
"""

import json
import logging
from html import escape
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .. import __version__
from ..config.constants import FILTER_ACTION, NONCE_ACTION
from ..exceptions import ContentRepositoryError
from ..models.render_context import RenderContext
from ..models.term import Term
from ..models.widget_options import WidgetOptions
from .nonce_service import NonceService
from .query_interceptor import requested_category
from .term_lister import TermLister

logger = logging.getLogger(__name__)

SHORTCODE_TAG = 'scf_blog_filter'
SCRIPT_NAME = 'scf-filter.js'
STYLE_NAME = 'scf-style.css'


def _button(term_id: int, label: str, active: bool) -> str:
    css_class = 'scf-btn is-active' if active else 'scf-btn'
    return (
        f'<button class="{css_class}" data-cat="{term_id}" type="button">'
        f'{escape(label)}</button>'
    )


def render_filter_widget(
    context: RenderContext,
    options: WidgetOptions,
    terms: Sequence[Term],
    active_category_id: Optional[int] = None
) -> str:
    """
    Render the filter button bar and mark the widget as used.

    Exactly one button is active: the one for ``active_category_id`` when it
    is rendered, otherwise "All" (or the first term when "All" is hidden).

    Args:
        context: Render state of the current page
        options: Widget options
        terms: Terms to render as buttons, in display order
        active_category_id: Category selected through the query string

    Returns:
        Widget HTML
    """
    context.widget_used = True

    rendered_ids = [0] if options.show_all else []
    rendered_ids += [term.id for term in terms]
    if active_category_id in rendered_ids:
        active_id = active_category_id
    else:
        active_id = rendered_ids[0] if rendered_ids else None

    buttons: List[str] = []
    if options.show_all:
        buttons.append(_button(0, options.all_label, active_id == 0))
    for term in terms:
        buttons.append(_button(term.id, term.name, active_id == term.id))

    return (
        '<div class="scf-blog-filter-ui"'
        f' data-base-url="{escape(options.base_url)}"'
        f' data-replace-selector="{escape(options.replace_selector)}"'
        f' data-page-id="{options.page_id}">'
        '<div class="scf-blog-filter-ui__buttons">'
        + ''.join(buttons) +
        '</div></div>'
    )


def render_shortcode(
    context: RenderContext,
    attributes: Mapping[str, Any],
    term_lister: TermLister,
    query_params: Mapping[str, str]
) -> str:
    """
    Render a widget from its shortcode/builder attributes.

    Args:
        context: Render state of the current page
        attributes: Raw widget attributes
        term_lister: Cached term lookup
        query_params: Query string of the page being rendered

    Returns:
        Widget HTML, or a short notice when terms cannot be loaded
    """
    options = WidgetOptions.from_attributes(attributes)

    try:
        terms = term_lister.list_terms(options.term_query())
    except ContentRepositoryError as e:
        logger.error(f"Filter widget not rendered: {e.message}")
        return '<p>Could not load categories.</p>'

    return render_filter_widget(
        context,
        options,
        terms,
        active_category_id=requested_category(query_params),
    )


def script_config(nonce_service: NonceService, ajax_url: str) -> Dict[str, Any]:
    """
    Configuration the client script reads from ``SCF_BLOG_FILTER``.

    Args:
        nonce_service: Issues the anti-forgery token
        ajax_url: URL of the filter endpoint

    Returns:
        Configuration dict
    """
    return {
        'ajaxUrl': ajax_url,
        'action': FILTER_ACTION,
        'nonce': nonce_service.create(NONCE_ACTION),
    }


def finalize_assets(
    context: RenderContext,
    nonce_service: NonceService,
    ajax_url: str,
    asset_base_url: str
) -> List[str]:
    """
    Tags to append to the page once rendering is complete.

    Args:
        context: Render state of the current page
        nonce_service: Issues the anti-forgery token
        ajax_url: URL of the filter endpoint
        asset_base_url: URL the packaged assets are served from

    Returns:
        Style, inline configuration and script tags; empty when no widget
        was rendered on the page
    """
    if not context.widget_used:
        return []

    base = asset_base_url.rstrip('/')
    config_json = json.dumps(script_config(nonce_service, ajax_url)).replace('</', '<\\/')

    return [
        f'<link rel="stylesheet" href="{escape(base)}/{STYLE_NAME}?ver={__version__}">',
        f'<script>var SCF_BLOG_FILTER = {config_json};</script>',
        f'<script src="{escape(base)}/{SCRIPT_NAME}?ver={__version__}"></script>',
    ]


def builder_element_definition() -> Dict[str, Any]:
    """
    Page-builder element exposing the widget's attributes.

    Returns:
        Element definition with name, base shortcode and parameter list
    """
    return {
        'name': 'Blog Category Filter (AJAX)',
        'base': SHORTCODE_TAG,
        'category': 'Content',
        'description': 'Filter the blog listing by category without leaving the page.',
        'params': [
            {
                'type': 'textfield',
                'heading': 'Base URL',
                'param_name': 'base_url',
                'description': 'Page whose listing is filtered.',
            },
            {
                'type': 'textfield',
                'heading': 'Replace selector',
                'param_name': 'replace_selector',
                'value': '.blog-wrap',
                'description': 'Single class (.name) or id (#name) of the listing wrapper.',
            },
            {
                'type': 'textfield',
                'heading': 'Target page ID',
                'param_name': 'page_id',
                'value': '0',
            },
            {
                'type': 'dropdown',
                'heading': 'Taxonomy',
                'param_name': 'taxonomy',
                'value': {'Category': 'category', 'Post Tag': 'post_tag'},
            },
            {
                'type': 'checkbox',
                'heading': 'Show "All" button',
                'param_name': 'show_all',
                'value': {'Yes': '1'},
                'std': '1',
            },
            {
                'type': 'textfield',
                'heading': '"All" label',
                'param_name': 'all_label',
                'value': 'All',
                'dependency': {'element': 'show_all', 'value': '1'},
            },
            {
                'type': 'textfield',
                'heading': 'Include term IDs',
                'param_name': 'include',
                'description': 'Comma-separated term IDs (example: 12,14,22). Leave blank for all.',
            },
            {
                'type': 'textfield',
                'heading': 'Exclude term IDs',
                'param_name': 'exclude',
                'description': 'Comma-separated term IDs to exclude.',
            },
            {
                'type': 'dropdown',
                'heading': 'Order by',
                'param_name': 'orderby',
                'value': {'Name': 'name', 'ID': 'id', 'Slug': 'slug', 'Post count': 'count'},
            },
            {
                'type': 'dropdown',
                'heading': 'Order',
                'param_name': 'order',
                'value': {'Ascending': 'ASC', 'Descending': 'DESC'},
            },
        ],
    }
