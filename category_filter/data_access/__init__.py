"""
Data access layer for DynamoDB operations.
"""
from .dynamodb_client import DynamoDBClient
from .transient_store import TransientStore
from .exceptions import DynamoDBError

__all__ = [
    'DynamoDBClient',
    'TransientStore',
    'DynamoDBError',
]
