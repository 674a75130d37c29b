"""
Tests for the in-memory token cache.
"""
import asyncio
from datetime import timedelta

import pytest

from carrier_rates.core.token_cache import CachedToken, InMemoryTokenCache


class TestInMemoryTokenCache:
    """Test lazy expiry and overwrite semantics."""

    @pytest.fixture
    def cache(self, clock):
        return InMemoryTokenCache(clock=clock)

    @pytest.mark.asyncio
    async def test_get_missing_key(self, cache):
        assert await cache.get("ups_token") is None
        assert cache.size() == 0

    @pytest.mark.asyncio
    async def test_get_valid_token(self, cache, clock):
        token = CachedToken("abc", clock() + timedelta(minutes=10))
        await cache.set("ups_token", token)

        assert await cache.get("ups_token") == token
        assert cache.size() == 1

    @pytest.mark.asyncio
    async def test_past_expiry_is_never_returned_and_is_evicted(self, cache, clock):
        await cache.set("ups_token", CachedToken("old", clock() - timedelta(seconds=1)))
        assert cache.size() == 1

        assert await cache.get("ups_token") is None
        assert cache.size() == 0

    @pytest.mark.asyncio
    async def test_expiry_boundary_is_exclusive(self, cache, clock):
        """A token expiring exactly now is already expired."""
        await cache.set("ups_token", CachedToken("edge", clock()))

        assert await cache.get("ups_token") is None

    @pytest.mark.asyncio
    async def test_token_expires_as_clock_advances(self, cache, clock):
        await cache.set("ups_token", CachedToken("abc", clock() + timedelta(minutes=1)))
        assert await cache.get("ups_token") is not None

        clock.advance(minutes=2)

        assert await cache.get("ups_token") is None
        assert cache.size() == 0

    @pytest.mark.asyncio
    async def test_set_overwrites(self, cache, clock):
        await cache.set("ups_token", CachedToken("first", clock() + timedelta(minutes=5)))
        await cache.set("ups_token", CachedToken("second", clock() + timedelta(minutes=5)))

        token = await cache.get("ups_token")
        assert token.access_token == "second"
        assert cache.size() == 1

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, cache, clock):
        await cache.set("ups_token", CachedToken("ups", clock() + timedelta(minutes=5)))
        await cache.set("fedex_token", CachedToken("fedex", clock() - timedelta(minutes=5)))

        assert (await cache.get("ups_token")).access_token == "ups"
        assert await cache.get("fedex_token") is None
        assert cache.size() == 1

    @pytest.mark.asyncio
    async def test_clear(self, cache, clock):
        await cache.set("a", CachedToken("a", clock() + timedelta(minutes=5)))
        await cache.set("b", CachedToken("b", clock() + timedelta(minutes=5)))

        cache.clear()

        assert cache.size() == 0
        assert await cache.get("a") is None

    @pytest.mark.asyncio
    async def test_concurrent_access(self, cache, clock):
        expires = clock() + timedelta(minutes=5)

        await asyncio.gather(*(
            cache.set(f"key{i % 5}", CachedToken(str(i), expires)) for i in range(50)
        ))
        results = await asyncio.gather(*(cache.get(f"key{i}") for i in range(5)))

        assert cache.size() == 5
        assert all(r is not None for r in results)

    def test_cached_token_is_immutable(self, clock):
        token = CachedToken("abc", clock())
        with pytest.raises(AttributeError):
            token.access_token = "changed"
