"""
Unit tests for the fragment cache.
"""
import pytest
from unittest.mock import Mock

from category_filter.data_access.exceptions import DynamoDBError
from category_filter.data_access.transient_store import TransientStore
from category_filter.exceptions import SelectorNotFoundError, UpstreamFetchError
from category_filter.services.fragment_cache import FragmentCache, build_cache_key


PARTS = ('https://example.com/blog/', '.blog-wrap', 5, 0)


@pytest.fixture
def mock_store():
    """Create mock Transient Store with an empty cache at version 0."""
    store = Mock(spec=TransientStore)
    store.get_counter.return_value = 0
    store.get.return_value = None
    return store


@pytest.fixture
def cache(mock_store):
    """Create FragmentCache with mock store."""
    return FragmentCache(mock_store, ttl_seconds=300)


class TestBuildCacheKey:
    """Test suite for cache key derivation."""

    def test_key_format(self):
        """Test key is prefix, version and a 32 character hash."""
        key = build_cache_key('fragment', PARTS, version=3)

        prefix, version, digest = key.split(':')
        assert prefix == 'fragment'
        assert version == 'v3'
        assert len(digest) == 32

    def test_key_is_deterministic(self):
        """Test same inputs give same key."""
        assert build_cache_key('fragment', PARTS) == build_cache_key('fragment', list(PARTS))

    @pytest.mark.parametrize('other', [
        ('https://example.com/news/', '.blog-wrap', 5, 0),
        ('https://example.com/blog/', '#posts', 5, 0),
        ('https://example.com/blog/', '.blog-wrap', 6, 0),
        ('https://example.com/blog/', '.blog-wrap', 5, 12),
    ])
    def test_each_part_affects_key(self, other):
        """Test that every component of the tuple is part of the key."""
        assert build_cache_key('fragment', PARTS) != build_cache_key('fragment', other)

    def test_part_order_matters(self):
        """Test that category and page ids are not interchangeable."""
        a = build_cache_key('fragment', ('https://example.com/', '.x', 1, 2))
        b = build_cache_key('fragment', ('https://example.com/', '.x', 2, 1))

        assert a != b

    def test_version_changes_key(self):
        """Test that bumping the version yields a new key."""
        assert build_cache_key('fragment', PARTS, 1) != build_cache_key('fragment', PARTS, 2)


class TestGetOrCompute:
    """Test suite for FragmentCache.get_or_compute."""

    def test_miss_computes_and_stores(self, cache, mock_store):
        """Test a miss stores the computed fragment with the TTL."""
        compute = Mock(return_value='<article>A</article>')

        html, cached = cache.get_or_compute(PARTS, compute)

        assert html == '<article>A</article>'
        assert cached is False
        compute.assert_called_once()
        mock_store.set.assert_called_once_with(
            build_cache_key('fragment', PARTS, 0),
            '<article>A</article>',
            300
        )

    def test_hit_returns_stored_value_without_computing(self, cache, mock_store):
        """Test a hit does not call compute."""
        mock_store.get.return_value = '<article>cached</article>'
        compute = Mock()

        html, cached = cache.get_or_compute(PARTS, compute)

        assert html == '<article>cached</article>'
        assert cached is True
        compute.assert_not_called()
        mock_store.set.assert_not_called()

    def test_empty_string_hit_is_served(self, cache, mock_store):
        """Test an empty cached fragment counts as a hit."""
        mock_store.get.return_value = ''
        compute = Mock()

        html, cached = cache.get_or_compute(PARTS, compute)

        assert html == ''
        assert cached is True
        compute.assert_not_called()

    @pytest.mark.parametrize('error', [
        UpstreamFetchError('Failed to fetch page: timeout'),
        SelectorNotFoundError('Replace selector not found in page: .x', selector='.x'),
    ])
    def test_failures_are_not_stored(self, cache, mock_store, error):
        """Test that compute failures propagate and nothing is cached."""
        compute = Mock(side_effect=error)

        with pytest.raises(type(error)):
            cache.get_or_compute(PARTS, compute)

        mock_store.set.assert_not_called()

    def test_key_uses_current_version(self, cache, mock_store):
        """Test that lookups use the version from the store."""
        mock_store.get_counter.return_value = 7

        cache.get_or_compute(PARTS, Mock(return_value='x'))

        mock_store.get.assert_called_once_with(build_cache_key('fragment', PARTS, 7))

    def test_precomputed_key_skips_version_lookup(self, cache, mock_store):
        """Test that a supplied key is used as is."""
        cache.get_or_compute(PARTS, Mock(return_value='x'), key='fragment:v9:abc')

        mock_store.get_counter.assert_not_called()
        mock_store.get.assert_called_once_with('fragment:v9:abc')

    def test_lookup_error_degrades_to_miss(self, cache, mock_store):
        """Test a store read failure computes the fragment."""
        mock_store.get.side_effect = DynamoDBError('throttled')

        html, cached = cache.get_or_compute(PARTS, Mock(return_value='fresh'))

        assert html == 'fresh'
        assert cached is False

    def test_store_error_still_returns_fragment(self, cache, mock_store):
        """Test a store write failure is not reported to the caller."""
        mock_store.set.side_effect = DynamoDBError('throttled')

        html, cached = cache.get_or_compute(PARTS, Mock(return_value='fresh'))

        assert html == 'fresh'
        assert cached is False

    def test_unreadable_version_bypasses_cache(self, cache, mock_store):
        """Test that without a version nothing is read or written."""
        mock_store.get_counter.side_effect = DynamoDBError('unavailable')

        assert cache.cache_key(PARTS) is None

        html, cached = cache.get_or_compute(PARTS, Mock(return_value='fresh'))

        assert html == 'fresh'
        assert cached is False
        mock_store.get.assert_not_called()
        mock_store.set.assert_not_called()

    def test_explicit_none_key_bypasses_without_second_lookup(self, cache, mock_store):
        """Test key=None from a failed version read is not retried."""
        mock_store.get_counter.side_effect = [DynamoDBError('unavailable'), 4]

        key = cache.cache_key(PARTS)
        html, cached = cache.get_or_compute(PARTS, Mock(return_value='fresh'), key=key)

        assert key is None
        assert html == 'fresh'
        assert cached is False
        assert mock_store.get_counter.call_count == 1
        mock_store.get.assert_not_called()
        mock_store.set.assert_not_called()

    def test_cache_stats(self, cache, mock_store):
        """Test hit and miss counters."""
        cache.get_or_compute(PARTS, Mock(return_value='x'))
        mock_store.get.return_value = 'x'
        cache.get_or_compute(PARTS, Mock())
        cache.get_or_compute(PARTS, Mock())

        stats = cache.get_cache_stats()

        assert stats['cache_hits'] == 2
        assert stats['cache_misses'] == 1
        assert stats['total_requests'] == 3
        assert stats['hit_rate'] == pytest.approx(2 / 3)
