"""
UPS API Client

Implements UPS OAuth 2.0 authentication and authenticated JSON calls:
- UPSAuthProvider: client-credentials exchange against the UPS OAuth endpoint
- UPSClient: attaches a bearer token to every request

Tokens are never held by UPSClient; every call asks the auth provider,
which answers from its cache when it can.
"""
import logging
from typing import Any, Dict, Optional

from carrier_rates.core.auth import AuthProvider, ClientCredentialsAuthProvider
from carrier_rates.core.http_client import HTTPClient
from carrier_rates.core.utils import utcnow

logger = logging.getLogger(__name__)

# OAuth endpoints
OAUTH_TOKEN_PATH = "/security/v1/oauth/token"

# API endpoints
RATING_PATH = "/api/rating/v2403/Rate"  # v2403 is current version


class UPSAuthProvider(ClientCredentialsAuthProvider):
    """Bearer tokens for the UPS APIs, cached under a single key."""

    carrier_name = "UPS"
    token_path = OAUTH_TOKEN_PATH
    cache_key = "ups_token"


class UPSClient:
    """
    Authenticated HTTP facade for UPS.

    Auth failures from the provider and NetworkError from the transport
    propagate unchanged; non-2xx responses surface as httpx.HTTPStatusError.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        auth_provider: AuthProvider,
        transaction_src: str = "carrier-rates",
    ):
        self.http_client = http_client
        self.auth_provider = auth_provider
        self.transaction_src = transaction_src

    async def close(self):
        await self.http_client.close()

    async def _auth_headers(self) -> Dict[str, str]:
        token = await self.auth_provider.get_token()
        return {
            "Authorization": f"Bearer {token}",
            "transId": f"cr_{utcnow().strftime('%Y%m%d%H%M%S%f')}",
            "transactionSrc": self.transaction_src,
        }

    async def authenticated_get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        headers = await self._auth_headers()
        return await self.http_client.get(path, params=params, headers=headers)

    async def authenticated_post(self, path: str, body: Any) -> Any:
        headers = await self._auth_headers()
        return await self.http_client.post(path, json=body, headers=headers)
