"""
DynamoDB table name constants.

Table names can be overridden per deployment environment through
environment variables.
"""
import os
from typing import Optional

# Transient Store table (fragment cache, term lists, cache version counter)
TRANSIENTS_TABLE_NAME = 'Transients'

TABLE_NAME_ENV_VARS = {
    'TRANSIENTS_TABLE_NAME': TRANSIENTS_TABLE_NAME,
}


def get_table_name(table_key: str, default: Optional[str] = None) -> str:
    """
    Get table name from environment variable or use default constant.

    Args:
        table_key: Environment variable key (e.g., 'TRANSIENTS_TABLE_NAME')
        default: Default table name if environment variable not set

    Returns:
        Table name from environment or default

    Example:
        >>> os.environ['TRANSIENTS_TABLE_NAME'] = 'Transients-dev'
        >>> get_table_name('TRANSIENTS_TABLE_NAME')
        'Transients-dev'
    """
    if default is None:
        default = TABLE_NAME_ENV_VARS.get(table_key, '')

    return os.getenv(table_key) or default
