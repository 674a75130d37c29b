"""
Tests for the authenticated UPS client.
"""
from unittest.mock import AsyncMock

import httpx
import pytest

from carrier_rates.core.exceptions import AuthenticationError, NetworkError
from carrier_rates.core.http_client import HTTPClient
from carrier_rates.core.token_cache import InMemoryTokenCache
from carrier_rates.services.ups_client import (
    OAUTH_TOKEN_PATH,
    RATING_PATH,
    UPSAuthProvider,
    UPSClient,
)

from tests.helpers import BASE_URL, RecordingHandler, token_response


def make_client(handler, clock):
    http_client = HTTPClient(BASE_URL, transport=handler.transport())
    auth = UPSAuthProvider(
        http_client,
        InMemoryTokenCache(clock=clock),
        client_id="test-client",
        client_secret="test-secret",
        clock=clock,
    )
    return UPSClient(http_client, auth, transaction_src="tests")


class TestUPSClient:
    """Test bearer token attachment."""

    @pytest.mark.asyncio
    async def test_post_attaches_bearer_token(self, ups_handler, clock):
        client = make_client(ups_handler, clock)

        data = await client.authenticated_post(RATING_PATH, {"RateRequest": {}})
        await client.close()

        assert "RateResponse" in data
        request = ups_handler.calls(RATING_PATH)[0]
        assert request.headers["Authorization"] == "Bearer test-access-token"
        assert request.headers["transactionSrc"] == "tests"
        assert request.headers["transId"].startswith("cr_")

    @pytest.mark.asyncio
    async def test_token_obtained_once_for_many_calls(self, ups_handler, clock):
        client = make_client(ups_handler, clock)

        for _ in range(3):
            await client.authenticated_post(RATING_PATH, {})
        await client.close()

        assert len(ups_handler.calls(OAUTH_TOKEN_PATH)) == 1
        assert len(ups_handler.calls(RATING_PATH)) == 3

    @pytest.mark.asyncio
    async def test_every_call_asks_auth_provider(self):
        """The client never holds on to a token itself."""
        handler = RecordingHandler({"/api/track": lambda r: httpx.Response(200, json={})})
        auth = AsyncMock()
        auth.get_token = AsyncMock(side_effect=["first", "second"])
        client = UPSClient(HTTPClient(BASE_URL, transport=handler.transport()), auth)

        await client.authenticated_get("/api/track", params={"locale": "en_US"})
        await client.authenticated_get("/api/track")
        await client.close()

        assert auth.get_token.await_count == 2
        assert handler.requests[0].headers["Authorization"] == "Bearer first"
        assert handler.requests[0].url.params["locale"] == "en_US"
        assert handler.requests[1].headers["Authorization"] == "Bearer second"

    @pytest.mark.asyncio
    async def test_auth_failure_propagates_unchanged(self, clock):
        handler = RecordingHandler({
            OAUTH_TOKEN_PATH: lambda r: httpx.Response(500, text="down"),
            RATING_PATH: lambda r: httpx.Response(200, json={}),
        })
        client = make_client(handler, clock)

        with pytest.raises(AuthenticationError):
            await client.authenticated_post(RATING_PATH, {})
        await client.close()

        assert handler.calls(RATING_PATH) == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_network_error(self, clock):
        def refuse(request):
            raise httpx.ReadTimeout("slow", request=request)

        handler = RecordingHandler({OAUTH_TOKEN_PATH: token_response, RATING_PATH: refuse})
        client = make_client(handler, clock)

        with pytest.raises(NetworkError):
            await client.authenticated_post(RATING_PATH, {})
        await client.close()
