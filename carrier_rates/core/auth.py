"""
OAuth 2.0 client-credentials authentication.

AuthProvider is the interface carrier clients depend on. The
client-credentials implementation exchanges a client id/secret for a
bearer token and keeps it in a shared InMemoryTokenCache until shortly
before it expires.
"""
import asyncio
import base64
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Optional

import httpx

from carrier_rates.core.exceptions import AuthenticationError, CarrierError
from carrier_rates.core.http_client import HTTPClient
from carrier_rates.core.token_cache import CachedToken, InMemoryTokenCache
from carrier_rates.core.utils import sanitize_for_logging, utcnow

logger = logging.getLogger(__name__)

# Tokens are treated as expired this long before the upstream expiry
REFRESH_BUFFER = timedelta(minutes=5)
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600


class AuthProvider(ABC):
    """Supplies bearer tokens for one carrier."""

    @abstractmethod
    async def get_token(self) -> str:
        """Return a valid token, refreshing only when needed."""
        pass

    @abstractmethod
    async def refresh_token(self) -> str:
        """Always perform a credential exchange and return the new token."""
        pass


class ClientCredentialsAuthProvider(AuthProvider):
    """
    Client-credentials token exchange backed by a token cache.

    Concurrent get_token() calls that all miss the cache are coalesced:
    the first one starts a refresh and every caller awaits that same
    exchange, receiving the same token or the same AuthenticationError.
    """

    carrier_name = "carrier"
    token_path = "/oauth/token"
    cache_key = "token"

    def __init__(
        self,
        http_client: HTTPClient,
        token_cache: InMemoryTokenCache,
        client_id: str,
        client_secret: str,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.http_client = http_client
        self.token_cache = token_cache
        self._client_id = client_id
        self._client_secret = client_secret
        self._clock = clock
        self._refresh_task: Optional[asyncio.Future] = None

    async def get_token(self) -> str:
        cached = await self.token_cache.get(self.cache_key)
        if cached is not None:
            return cached.access_token

        if self._refresh_task is None:
            self._refresh_task = asyncio.ensure_future(self._shared_refresh())
        # A cancelled caller must not cancel the exchange other callers await
        return await asyncio.shield(self._refresh_task)

    async def _shared_refresh(self) -> str:
        try:
            return await self.refresh_token()
        finally:
            self._refresh_task = None

    async def refresh_token(self) -> str:
        auth_string = f"{self._client_id}:{self._client_secret}"
        auth_header = base64.b64encode(auth_string.encode()).decode()

        try:
            data = await self.http_client.post(
                self.token_path,
                data={"grant_type": "client_credentials"},
                headers={
                    "Authorization": f"Basic {auth_header}",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
            )
            access_token = data["access_token"]
            expires_in = int(data.get("expires_in", DEFAULT_TOKEN_LIFETIME_SECONDS))
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                f"{self.carrier_name} OAuth failed: {status} - "
                f"{sanitize_for_logging(e.response.text)}"
            )
            raise AuthenticationError(
                f"Failed to authenticate with {self.carrier_name}",
                details={"status": status},
            ) from e
        except CarrierError as e:
            logger.error(f"{self.carrier_name} OAuth request failed: {e.code}")
            raise AuthenticationError(
                f"Failed to authenticate with {self.carrier_name}",
                details={"cause": e.code},
            ) from e
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"{self.carrier_name} OAuth returned an unusable token payload")
            raise AuthenticationError(
                f"Failed to authenticate with {self.carrier_name}",
                details={"cause": "INVALID_TOKEN_RESPONSE"},
            ) from e

        expires_at = self._clock() + timedelta(seconds=expires_in) - REFRESH_BUFFER
        await self.token_cache.set(
            self.cache_key,
            CachedToken(access_token=access_token, expires_at=expires_at),
        )

        logger.info(f"{self.carrier_name} OAuth token obtained, expires in {expires_in}s")
        return access_token
