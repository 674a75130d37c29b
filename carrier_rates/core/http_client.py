"""
HTTP transport for carrier APIs.

Thin async wrapper over httpx:
- One lazily created httpx.AsyncClient per base URL
- Request timeout from configuration
- Non-2xx responses raise httpx.HTTPStatusError so callers can classify
  by status code
- Transport failures (no response received) raise NetworkError

No retries or rate limiting happen here; callers decide what a failure
means for them.

Usage:
    async with HTTPClient("https://wwwcie.ups.com") as client:
        data = await client.post("/api/rating/v2403/Rate", json=body)
"""
import logging
from typing import Any, Dict, Optional

import httpx

from carrier_rates.core.exceptions import CarrierAPIError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HTTPClient:
    """
    Async JSON HTTP client bound to a base URL.

    A custom httpx transport can be passed in (httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        default_headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_headers = {"Content-Type": "application/json"}
        self.default_headers.update(default_headers or {})
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the client. Use this when not using context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: upstream answered with a non-2xx status
            NetworkError: no response was received
            CarrierAPIError: 2xx response whose body is not JSON
        """
        client = self._get_client()

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"HTTP {method} {path} failed: {e.__class__.__name__}")
            raise NetworkError(
                f"Network error calling {self.base_url}: {e.__class__.__name__}",
                details={"method": method, "path": path},
            ) from e

        logger.debug(f"HTTP {method} {path} -> {response.status_code}")
        response.raise_for_status()

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise CarrierAPIError(
                "Upstream returned a non-JSON body",
                status_code=response.status_code,
                details={"method": method, "path": path},
            ) from e

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("POST", path, json=json, data=data, headers=headers)
