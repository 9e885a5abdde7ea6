"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")
os.environ.setdefault("IDENTITY_URL", "https://identity.test/auth/v1")
os.environ.setdefault("IDENTITY_ANON_KEY", "test-anon-key")
# Test client talks plain http; secure cookies would never be sent back
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

# ruff: noqa: E402 - Imports must be after env var setup
from uuid import uuid4

import pytest

from src.app.core.config import get_settings
from src.app.core.identity import IdentityUser
from tests.helpers import FakeIdentityProvider

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def identity_user() -> IdentityUser:
    """A confirmed identity with first/last name metadata."""
    return IdentityUser(
        id=uuid4(),
        email="ada@example.com",
        user_metadata={"first_name": "Ada", "last_name": "Lovelace"},
        email_confirmed=True,
    )


@pytest.fixture
def fake_identity() -> FakeIdentityProvider:
    """In-memory identity provider with the same interface as the real client."""
    return FakeIdentityProvider()
