"""
Shared test doubles: a controllable clock and a recording mock transport.
"""
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List

import httpx

BASE_URL = "https://wwwcie.ups.com"


class FakeClock:
    """Manually advanced clock returning timezone-aware datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class RecordingHandler:
    """
    httpx.MockTransport handler that routes by path and records requests.

    Routes map a URL path to a callable taking the request and returning a
    response (sync or async).
    """

    def __init__(self, routes: Dict[str, Callable[[httpx.Request], Any]]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        response = route(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def token_response(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "access_token": "test-access-token",
            "token_type": "Bearer",
            "expires_in": "14399",
            "status": "approved",
        },
    )


def ups_rate_payload(
    service_code: str = "03",
    amount: str = "12.50",
    currency: str = "USD",
) -> Dict[str, Any]:
    return {
        "RateResponse": {
            "Response": {
                "ResponseStatus": {"Code": "1", "Description": "Success"},
                "TransactionReference": {"CustomerContext": "Rating Request"},
            },
            "RatedShipment": [
                {
                    "Service": {"Code": service_code, "Description": ""},
                    "TotalCharges": {"CurrencyCode": currency, "MonetaryValue": amount},
                }
            ],
        }
    }
