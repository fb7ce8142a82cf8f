"""
Unit tests for cache invalidation.
"""
import pytest
from unittest.mock import Mock

from category_filter.data_access.transient_store import TransientStore
from category_filter.services.cache_invalidator import CacheInvalidator


class TestCacheInvalidator:
    """Test suite for CacheInvalidator."""

    @pytest.mark.parametrize('event_type', [
        'Post Saved', 'Post Deleted', 'Term Created', 'Term Edited', 'Term Deleted',
    ])
    def test_mutation_events(self, event_type):
        """Test events that invalidate."""
        assert CacheInvalidator.is_mutation_event(event_type)

    @pytest.mark.parametrize('event_type', ['Comment Added', '', 'post saved'])
    def test_other_events(self, event_type):
        """Test events that do not invalidate."""
        assert not CacheInvalidator.is_mutation_event(event_type)

    def test_bump_increments_version_counter(self):
        """Test version counter key."""
        store = Mock(spec=TransientStore)
        store.increment_counter.return_value = 8

        assert CacheInvalidator(store).bump() == 8
        store.increment_counter.assert_called_once_with('scf_cache_version')
