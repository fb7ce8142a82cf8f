"""
Configuration module for the category filter.

Provides environment variable loading, constants and table name resolution.
"""

from .settings import Settings, get_settings, reset_settings
from .table_names import get_table_name, TRANSIENTS_TABLE_NAME

__all__ = [
    'Settings',
    'get_settings',
    'reset_settings',
    'get_table_name',
    'TRANSIENTS_TABLE_NAME',
]
