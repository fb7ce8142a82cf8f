"""
Custom exceptions for data access layer.
"""


class DynamoDBError(Exception):
    """Base exception for DynamoDB operations."""
    pass
