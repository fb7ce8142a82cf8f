"""
Pytest configuration and fixtures.
"""
import pytest
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from category_filter.config.settings import reset_settings

TEST_NONCE_SECRET = 'test-nonce-secret-0123456789abcdef0123456789'


@pytest.fixture(scope="session")
def aws_credentials():
    """Mock AWS credentials for testing."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(scope="session", autouse=True)
def env_vars():
    """Set up environment variables for tests."""
    os.environ["ENV"] = "test"
    os.environ["AWS_REGION"] = "us-east-1"
    os.environ["TRANSIENTS_TABLE_NAME"] = "Transients-test"
    os.environ["NONCE_SECRET"] = TEST_NONCE_SECRET
    os.environ["SITE_URL"] = "https://example.com"
    os.environ["ENABLE_METRICS"] = "false"
    os.environ["LOG_LEVEL"] = "INFO"


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()
