"""
Pytest configuration and fixtures for carrier rate tests.
"""
import os
from datetime import datetime, timezone
from typing import Any, Dict

import httpx
import pytest

# Set test environment before importing package modules
os.environ["ENVIRONMENT"] = "development"
os.environ["UPS_CLIENT_ID"] = "test-client"
os.environ["UPS_CLIENT_SECRET"] = "test-secret"

from carrier_rates.core.config import Settings  # noqa: E402
from carrier_rates.services.ups_client import OAUTH_TOKEN_PATH, RATING_PATH  # noqa: E402

from tests.helpers import (  # noqa: E402
    BASE_URL,
    FakeClock,
    RecordingHandler,
    token_response,
    ups_rate_payload,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        UPS_BASE_URL=BASE_URL,
        UPS_CLIENT_ID="test-client",
        UPS_CLIENT_SECRET="test-secret",
        UPS_ACCOUNT_NUMBER="A1B2C3",
        REQUEST_TIMEOUT_MS=5000,
    )


@pytest.fixture
def sample_request() -> Dict[str, Any]:
    """Rate request in wire (camelCase) form."""
    return {
        "origin": {
            "street": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "country": "US",
        },
        "destination": {
            "street": "350 5th Ave",
            "city": "New York",
            "state": "NY",
            "zipCode": "10118",
            "country": "US",
        },
        "package": {
            "weight": 5,
            "weightUnit": "LBS",
            "length": 10,
            "width": 8,
            "height": 6,
            "dimensionUnit": "IN",
        },
        "serviceLevel": "GROUND",
    }


@pytest.fixture
def ups_handler() -> RecordingHandler:
    """Token endpoint and rating endpoint both succeed."""
    return RecordingHandler({
        OAUTH_TOKEN_PATH: token_response,
        RATING_PATH: lambda request: httpx.Response(200, json=ups_rate_payload()),
    })
