"""
Configuration settings for the category filter.

Loads configuration from environment variables with sensible defaults.
"""

import os
from typing import Optional

from .constants import (
    EMPTY_TERMS_CACHE_TTL_SECONDS,
    FETCH_TIMEOUT_SECONDS,
    FRAGMENT_CACHE_TTL_SECONDS,
    NONCE_LIFETIME_SECONDS,
    TERMS_CACHE_TTL_SECONDS,
)
from .table_names import get_table_name


class Settings:
    """
    Configuration settings for the filter endpoint and its caches.

    All settings are loaded from environment variables with defaults.
    """

    def __init__(self):
        """Initialize settings from environment variables."""
        # AWS Configuration
        self.env: str = os.getenv('ENV', 'dev')
        self.aws_region: str = os.getenv('AWS_REGION', 'us-east-1')
        self.transients_table: str = get_table_name('TRANSIENTS_TABLE_NAME')

        # Host site
        self.site_url: str = os.getenv('SITE_URL', '')
        self.content_api_url: str = os.getenv('CONTENT_API_URL', '')

        # Anti-forgery tokens
        self.nonce_secret: str = os.getenv('NONCE_SECRET', '')
        self.nonce_lifetime_seconds: int = int(
            os.getenv('NONCE_LIFETIME_SECONDS', str(NONCE_LIFETIME_SECONDS))
        )

        # Cache lifetimes
        self.fragment_cache_ttl_seconds: int = int(
            os.getenv('FRAGMENT_CACHE_TTL_SECONDS', str(FRAGMENT_CACHE_TTL_SECONDS))
        )
        self.terms_cache_ttl_seconds: int = int(
            os.getenv('TERMS_CACHE_TTL_SECONDS', str(TERMS_CACHE_TTL_SECONDS))
        )
        self.empty_terms_cache_ttl_seconds: int = int(
            os.getenv('EMPTY_TERMS_CACHE_TTL_SECONDS', str(EMPTY_TERMS_CACHE_TTL_SECONDS))
        )

        # Self-request
        self.fetch_timeout_seconds: float = float(
            os.getenv('FETCH_TIMEOUT_SECONDS', str(FETCH_TIMEOUT_SECONDS))
        )

        # Observability
        self.enable_metrics: bool = self._parse_bool(os.getenv('ENABLE_METRICS', 'true'))
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO')

        self._validate()

    def _parse_bool(self, value: str) -> bool:
        """
        Parse boolean value from string.

        Args:
            value: String value to parse

        Returns:
            Boolean value
        """
        return value.lower() in ('true', '1', 'yes', 'on')

    def _validate(self):
        """Validate configuration values."""
        for name in (
            'fragment_cache_ttl_seconds',
            'terms_cache_ttl_seconds',
            'empty_terms_cache_ttl_seconds',
            'nonce_lifetime_seconds',
        ):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name.upper()} must be at least 1, got {value}")

        if self.fetch_timeout_seconds <= 0:
            raise ValueError(
                f"FETCH_TIMEOUT_SECONDS must be positive, got {self.fetch_timeout_seconds}"
            )

        if self.site_url and not self.site_url.startswith(('http://', 'https://')):
            raise ValueError(f"SITE_URL must be an http(s) URL, got {self.site_url}")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {self.log_level}. "
                f"Must be one of {valid_log_levels}"
            )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
