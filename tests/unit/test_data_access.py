"""
Unit tests for the data access layer.
Tests expiry checks, counters and ClientError translation.
"""
import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from category_filter.data_access.dynamodb_client import DynamoDBClient
from category_filter.data_access.exceptions import DynamoDBError
from category_filter.data_access.transient_store import TransientStore

NOW = 1_700_000_000


def client_error(code):
    return ClientError({'Error': {'Code': code, 'Message': code}}, 'Operation')


@pytest.fixture
def mock_dynamodb_client():
    """Create mock DynamoDB client."""
    return Mock(spec=DynamoDBClient)


@pytest.fixture
def store(mock_dynamodb_client):
    """Create TransientStore with mock client."""
    return TransientStore('Transients-test', mock_dynamodb_client)


@pytest.fixture
def frozen_time():
    """Freeze the store's clock at NOW."""
    with patch('category_filter.data_access.transient_store.time') as mock_time:
        mock_time.time.return_value = NOW
        yield mock_time


class TestTransientStore:
    """Test suite for TransientStore."""

    def test_set_writes_expiry(self, store, mock_dynamodb_client, frozen_time):
        """Test item layout."""
        store.set('fragment:v0:abc', '<p>x</p>', 300)

        mock_dynamodb_client.put_item.assert_called_once_with(
            table_name='Transients-test',
            item={
                'transientKey': 'fragment:v0:abc',
                'value': '<p>x</p>',
                'createdAt': NOW,
                'expiresAt': NOW + 300,
            }
        )

    def test_get_returns_live_value(self, store, mock_dynamodb_client, frozen_time):
        """Test unexpired entry."""
        mock_dynamodb_client.get_item.return_value = {
            'transientKey': 'k', 'value': 'v', 'expiresAt': NOW + 1
        }

        assert store.get('k') == 'v'

    def test_get_treats_expiry_boundary_as_miss(self, store, mock_dynamodb_client, frozen_time):
        """Test an entry is gone at exactly its expiry time."""
        mock_dynamodb_client.get_item.return_value = {
            'transientKey': 'k', 'value': 'v', 'expiresAt': NOW
        }

        assert store.get('k') is None

    def test_get_missing_item(self, store, mock_dynamodb_client):
        """Test absent entry."""
        mock_dynamodb_client.get_item.return_value = None

        assert store.get('k') is None

    def test_counter_defaults_to_zero(self, store, mock_dynamodb_client):
        """Test unset counter."""
        mock_dynamodb_client.get_item.return_value = None

        assert store.get_counter('scf_cache_version') == 0

    def test_increment_counter(self, store, mock_dynamodb_client):
        """Test atomic increment delegation."""
        mock_dynamodb_client.atomic_increment.return_value = 4

        assert store.increment_counter('scf_cache_version') == 4
        mock_dynamodb_client.atomic_increment.assert_called_once_with(
            table_name='Transients-test',
            key={'transientKey': 'scf_cache_version'},
            attribute_name='version',
            increment_value=1
        )


class TestDynamoDBClientErrors:
    """Test suite for ClientError translation."""

    @pytest.fixture
    def client_and_table(self):
        """Create client with mock table."""
        client = DynamoDBClient()
        mock_table = Mock()
        client.get_table = Mock(return_value=mock_table)
        return client, mock_table

    def test_get_item_error(self, client_and_table):
        """Test read errors."""
        client, mock_table = client_and_table
        mock_table.get_item.side_effect = client_error('ProvisionedThroughputExceededException')

        with pytest.raises(DynamoDBError):
            client.get_item('Transients-test', {'transientKey': 'k'})

    def test_put_item_error(self, client_and_table):
        """Test write errors."""
        client, mock_table = client_and_table
        mock_table.put_item.side_effect = client_error('ResourceNotFoundException')

        with pytest.raises(DynamoDBError):
            client.put_item('Transients-test', {'transientKey': 'k'})

    def test_atomic_increment_returns_new_value(self, client_and_table):
        """Test ADD update expression."""
        client, mock_table = client_and_table
        mock_table.update_item.return_value = {'Attributes': {'version': 3}}

        assert client.atomic_increment('Transients-test', {'transientKey': 'v'}, 'version') == 3
        kwargs = mock_table.update_item.call_args[1]
        assert kwargs['UpdateExpression'] == 'ADD #attr :inc'
        assert kwargs['ReturnValues'] == 'ALL_NEW'
