"""
Unit tests for widget rendering and asset finalization.
"""
import json
import re
import pytest
from unittest.mock import Mock

from category_filter.exceptions import ContentRepositoryError
from category_filter.models.render_context import RenderContext
from category_filter.models.term import Term, TermQuery
from category_filter.models.widget_options import WidgetOptions
from category_filter.services.nonce_service import NonceService
from category_filter.services.term_lister import TermLister
from category_filter.services.widget_renderer import (
    builder_element_definition,
    finalize_assets,
    render_filter_widget,
    render_shortcode,
    script_config,
)

SECRET = 'unit-test-secret-0123456789abcdef0123456789'

TERMS = [Term(id=1, name='Events', count=2), Term(id=5, name='Guides & Tips', count=1)]


@pytest.fixture
def nonce_service():
    """Create nonce service."""
    return NonceService(SECRET)


@pytest.fixture
def options():
    """Widget options for the blog listing."""
    return WidgetOptions(base_url='https://example.com/blog/', page_id=0)


def active_ids(html):
    return re.findall(r'class="scf-btn is-active" data-cat="(\d+)"', html)


class TestRenderFilterWidget:
    """Test suite for render_filter_widget."""

    def test_renders_all_button_and_terms(self, options):
        """Test button markup and data attributes."""
        context = RenderContext()

        html = render_filter_widget(context, options, TERMS)

        assert 'data-base-url="https://example.com/blog/"' in html
        assert 'data-replace-selector=".blog-wrap"' in html
        assert 'data-page-id="0"' in html
        assert 'data-cat="0" type="button">All</button>' in html
        assert 'data-cat="5" type="button">Guides &amp; Tips</button>' in html
        assert context.widget_used is True

    def test_all_is_active_by_default(self, options):
        """Test exactly one active button."""
        assert active_ids(render_filter_widget(RenderContext(), options, TERMS)) == ['0']

    def test_requested_category_is_active(self, options):
        """Test active state follows the query string."""
        html = render_filter_widget(RenderContext(), options, TERMS, active_category_id=5)

        assert active_ids(html) == ['5']

    def test_unknown_category_falls_back_to_all(self, options):
        """Test a category without a button."""
        html = render_filter_widget(RenderContext(), options, TERMS, active_category_id=99)

        assert active_ids(html) == ['0']

    def test_without_all_button_first_term_is_active(self):
        """Test show_all disabled."""
        options = WidgetOptions(show_all=False)

        html = render_filter_widget(RenderContext(), options, TERMS)

        assert 'data-cat="0"' not in html
        assert active_ids(html) == ['1']


class TestRenderShortcode:
    """Test suite for render_shortcode."""

    def test_renders_from_attributes(self):
        """Test attributes are parsed and terms requested."""
        lister = Mock(spec=TermLister)
        lister.list_terms.return_value = TERMS
        context = RenderContext()

        html = render_shortcode(
            context,
            {'base_url': 'https://example.com/blog/', 'include': '1, 5', 'order': 'desc', 'all_label': 'Everything'},
            lister,
            {'scf_cat': '1'},
        )

        query = lister.list_terms.call_args[0][0]
        assert query == TermQuery(include=(1, 5), order='DESC')
        assert '>Everything</button>' in html
        assert active_ids(html) == ['1']
        assert context.widget_used is True

    def test_repository_error_renders_notice(self):
        """Test term load failure."""
        lister = Mock(spec=TermLister)
        lister.list_terms.side_effect = ContentRepositoryError('Could not load categories: timeout')
        context = RenderContext()

        html = render_shortcode(context, {}, lister, {})

        assert html == '<p>Could not load categories.</p>'
        assert context.widget_used is False


class TestFinalizeAssets:
    """Test suite for asset emission."""

    def test_no_assets_without_widget(self, nonce_service):
        """Test pages without a widget get nothing."""
        assert finalize_assets(RenderContext(), nonce_service, '/filter', '/static') == []

    def test_assets_after_widget(self, nonce_service, options):
        """Test style, configuration and script tags."""
        context = RenderContext()
        render_filter_widget(context, options, TERMS)

        tags = finalize_assets(context, nonce_service, 'https://api.example.com/filter', '/static/')

        assert tags[0] == '<link rel="stylesheet" href="/static/scf-style.css?ver=1.0.0">'
        assert tags[2] == '<script src="/static/scf-filter.js?ver=1.0.0"></script>'

        config = json.loads(re.match(r'<script>var SCF_BLOG_FILTER = (.*);</script>', tags[1]).group(1))
        assert config['ajaxUrl'] == 'https://api.example.com/filter'
        assert config['action'] == 'scf_get_blog_html'
        nonce_service.verify(config['nonce'], 'scf_blog_filter')

    def test_script_config_escapes_closing_tags(self, nonce_service):
        """Test the inline configuration cannot close the script element."""
        context = RenderContext(widget_used=True)

        tags = finalize_assets(context, nonce_service, 'https://x/</script>', '/static')

        assert '</script>' not in tags[1][:-len('</script>')]

    def test_script_config_keys(self, nonce_service):
        """Test configuration dict."""
        assert set(script_config(nonce_service, '/filter')) == {'ajaxUrl', 'action', 'nonce'}


class TestBuilderElementDefinition:
    """Test suite for the page-builder element."""

    def test_definition_exposes_widget_attributes(self):
        """Test parameter names match WidgetOptions."""
        definition = builder_element_definition()

        assert definition['base'] == 'scf_blog_filter'
        params = {param['param_name'] for param in definition['params']}
        assert params == {
            'base_url', 'replace_selector', 'page_id', 'taxonomy', 'show_all',
            'all_label', 'include', 'exclude', 'orderby', 'order',
        }
