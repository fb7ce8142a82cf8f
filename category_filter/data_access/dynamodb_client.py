"""
DynamoDB client for the Transients table.

Wraps the boto3 table resource and translates ``ClientError`` into the
data access exceptions the services handle.
"""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

from .exceptions import DynamoDBError

logger = logging.getLogger(__name__)


class DynamoDBClient:
    """
    Item-level DynamoDB operations with error translation.
    """

    def __init__(self, region: str = 'us-east-1'):
        """
        Initialize DynamoDB client.

        Args:
            region: AWS region for DynamoDB
        """
        self.dynamodb = boto3.resource('dynamodb', region_name=region)

    def get_table(self, table_name: str):
        """Table resource for ``table_name``."""
        return self.dynamodb.Table(table_name)

    def _call(self, table_name: str, operation: str, **kwargs) -> Dict[str, Any]:
        """
        Run one table operation.

        Raises:
            DynamoDBError: On any ClientError
        """
        try:
            return getattr(self.get_table(table_name), operation)(**kwargs)
        except ClientError as e:
            logger.error(f"DynamoDB {operation} on {table_name} failed: {e}")
            raise DynamoDBError(f"Failed to {operation.replace('_', ' ')}: {e}") from e

    def get_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        consistent_read: bool = False
    ) -> Optional[Dict[str, Any]]:
        """
        Read one item.

        Args:
            table_name: Name of the table
            key: Primary key of the item
            consistent_read: Use a strongly consistent read

        Returns:
            Item dict or None if not found
        """
        response = self._call(
            table_name,
            'get_item',
            Key=key,
            ConsistentRead=consistent_read
        )
        return response.get('Item')

    def put_item(self, table_name: str, item: Dict[str, Any]) -> None:
        """
        Write one item, replacing any existing item with the same key.

        Args:
            table_name: Name of the table
            item: Item to write
        """
        self._call(table_name, 'put_item', Item=item)

    def update_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Update one item.

        Args:
            table_name: Name of the table
            key: Primary key of the item
            update_expression: Update expression
            expression_attribute_values: Values referenced by the expression
            expression_attribute_names: Names referenced by the expression
            return_values: NONE, ALL_OLD, UPDATED_OLD, ALL_NEW or UPDATED_NEW

        Returns:
            Returned attributes, if any
        """
        kwargs: Dict[str, Any] = {
            'Key': key,
            'UpdateExpression': update_expression,
            'ReturnValues': return_values,
        }
        if expression_attribute_values:
            kwargs['ExpressionAttributeValues'] = expression_attribute_values
        if expression_attribute_names:
            kwargs['ExpressionAttributeNames'] = expression_attribute_names

        return self._call(table_name, 'update_item', **kwargs).get('Attributes')

    def atomic_increment(
        self,
        table_name: str,
        key: Dict[str, Any],
        attribute_name: str,
        increment_value: int = 1
    ) -> int:
        """
        Atomically add to a numeric attribute, creating the item if needed.

        Args:
            table_name: Name of the table
            key: Primary key of the item
            attribute_name: Counter attribute
            increment_value: Amount to add

        Returns:
            Counter value after the increment
        """
        attributes = self.update_item(
            table_name=table_name,
            key=key,
            update_expression='ADD #attr :inc',
            expression_attribute_values={':inc': increment_value},
            expression_attribute_names={'#attr': attribute_name},
            return_values='ALL_NEW'
        )
        return int(attributes[attribute_name]) if attributes else 0
