"""
Unit tests for the REST content repository.
"""
import pytest
import requests
from unittest.mock import Mock

from category_filter.exceptions import ContentRepositoryError
from category_filter.models.term import Term
from category_filter.services.content_repository import RestContentRepository


def make_response(items, total_pages=1):
    response = Mock()
    response.json.return_value = items
    response.headers = {'X-WP-TotalPages': str(total_pages)}
    response.raise_for_status = Mock()
    return response


@pytest.fixture
def mock_session():
    """Create mock requests session."""
    return Mock(spec=requests.Session)


class TestRestContentRepository:
    """Test suite for RestContentRepository.get_terms."""

    def test_loads_categories(self, mock_session):
        """Test single page of categories."""
        mock_session.get.return_value = make_response([
            {'id': 1, 'name': 'Events', 'slug': 'events', 'count': 3, 'link': 'ignored'},
        ])
        repository = RestContentRepository('https://example.com/wp-json/', session=mock_session)

        terms = repository.get_terms('category')

        assert terms == [Term(id=1, name='Events', slug='events', count=3)]
        mock_session.get.assert_called_once_with(
            'https://example.com/wp-json/wp/v2/categories',
            params={'per_page': 100, 'page': 1},
            timeout=10,
        )

    def test_follows_pagination(self, mock_session):
        """Test all pages are read."""
        mock_session.get.side_effect = [
            make_response([{'id': 1, 'name': 'A'}], total_pages=2),
            make_response([{'id': 2, 'name': 'B'}], total_pages=2),
        ]
        repository = RestContentRepository('https://example.com/wp-json', session=mock_session)

        terms = repository.get_terms('post_tag')

        assert [t.id for t in terms] == [1, 2]
        assert mock_session.get.call_count == 2
        assert mock_session.get.call_args[0][0] == 'https://example.com/wp-json/wp/v2/tags'

    def test_unknown_taxonomy(self, mock_session):
        """Test taxonomies without a REST route."""
        repository = RestContentRepository('https://example.com/wp-json', session=mock_session)

        with pytest.raises(ContentRepositoryError) as exc_info:
            repository.get_terms('genre')

        assert exc_info.value.message == 'Taxonomy not found: genre'
        mock_session.get.assert_not_called()

    def test_http_error(self, mock_session):
        """Test error statuses."""
        response = make_response([])
        response.raise_for_status.side_effect = requests.HTTPError('503 Server Error')
        mock_session.get.return_value = response
        repository = RestContentRepository('https://example.com/wp-json', session=mock_session)

        with pytest.raises(ContentRepositoryError):
            repository.get_terms('category')

    def test_invalid_json(self, mock_session):
        """Test non-JSON bodies."""
        response = make_response([])
        response.json.side_effect = ValueError('Expecting value')
        mock_session.get.return_value = response
        repository = RestContentRepository('https://example.com/wp-json', session=mock_session)

        with pytest.raises(ContentRepositoryError):
            repository.get_terms('category')
