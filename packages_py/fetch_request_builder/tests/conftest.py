"""
Shared fixtures for fetch_request_builder tests.
"""
from datetime import datetime, timezone

import httpx
import pytest

from fetch_request_builder import BuilderConfig


@pytest.fixture
def request_message():
    """Fresh GET request with no composed headers."""
    return httpx.Request("GET", "https://api.example.com/items")


@pytest.fixture
def fixed_date():
    """A fixed UTC timestamp without sub-second precision."""
    return datetime(1994, 11, 6, 8, 49, 37, tzinfo=timezone.utc)


@pytest.fixture
def fixed_date_header():
    """IMF-fixdate form of fixed_date."""
    return "Sun, 06 Nov 1994 08:49:37 GMT"


@pytest.fixture
def sample_config():
    """Config with non-default masking and q-value precision."""
    return BuilderConfig(mask_visible_chars=4, quality_precision=1)

