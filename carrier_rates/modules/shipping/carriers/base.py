"""
Base Carrier Interface

All carriers implement one capability, get_rates(), and share the
upstream error classification below:

    401 / 403        -> AuthenticationError
    429              -> RateLimitError
    other 4xx        -> ValidationError
    5xx              -> CarrierAPIError
    anything else    -> CarrierAPIError carrying the cause

Errors that are already typed (AuthenticationError from the auth
provider, NetworkError from the transport) pass through untouched.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from carrier_rates.core.exceptions import (
    AuthenticationError,
    CarrierAPIError,
    CarrierError,
    RateLimitError,
    ValidationError,
)
from carrier_rates.core.utils import sanitize_for_logging
from carrier_rates.schemas.rates import RateRequest, RateResponse

logger = logging.getLogger(__name__)


class CarrierAdapter(ABC):
    """Rate quoting for one carrier."""

    carrier_name = "Generic Carrier"

    @abstractmethod
    async def get_rates(self, request: RateRequest) -> RateResponse:
        """
        Get shipping rates from the carrier.

        Args:
            request: Domain rate request (or a mapping that validates as one)

        Returns:
            RateResponse with one Rate per quoted service

        Raises:
            CarrierError subclass describing the failure
        """
        pass

    def extract_upstream_errors(self, response: httpx.Response) -> Optional[Any]:
        """Pull the carrier's error list out of an error response body."""
        try:
            return response.json()
        except ValueError:
            return None

    def translate_error(self, error: Exception) -> CarrierError:
        """Classify an upstream failure into the carrier error taxonomy."""
        if isinstance(error, CarrierError):
            return error

        name = self.carrier_name

        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            status = response.status_code
            details: Dict[str, Any] = {
                "status": status,
                "errors": self.extract_upstream_errors(response),
            }

            logger.error(f"{name} API error: {status} - {sanitize_for_logging(response.text)}")

            if status in (401, 403):
                return AuthenticationError(f"{name} authentication failed", details=details)

            if status == 429:
                return RateLimitError(
                    f"{name} rate limit exceeded",
                    retry_after=response.headers.get("retry-after"),
                    details=details,
                )

            if 400 <= status < 500:
                return ValidationError(f"Invalid request to {name} API", details=details)

            if status >= 500:
                return CarrierAPIError(f"{name} API server error", status_code=status, details=details)

        logger.error(f"{name} request failed: {error.__class__.__name__}: {error}")
        return CarrierAPIError(
            f"Unknown {name} API error",
            details={"error": f"{error.__class__.__name__}: {error}"},
        )
