"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear cached settings and API client before and after each test.

    Prevents a .env file or an earlier test's environment from leaking
    into the next test.
    """
    from uploads_fs.core.config import get_settings
    from uploads_fs.storage import get_api_client

    get_settings.cache_clear()
    get_api_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_api_client.cache_clear()
