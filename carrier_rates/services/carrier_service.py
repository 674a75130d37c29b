"""
Multi-Carrier Rate Service

- Registry of carrier adapters keyed by case-insensitive carrier name
- Single-carrier lookups propagate the adapter's typed error unchanged
- Comparisons query every carrier concurrently and wait for all of them;
  failed carriers are logged and reported, never raised

Usage:
    service = create_carrier_service()
    response = await service.get_rates("ups", request)
    comparison = await service.compare_rates_detailed(request)
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from carrier_rates.core.config import Settings, settings as default_settings
from carrier_rates.core.exceptions import CarrierAPIError, CarrierError, CarrierNotSupportedError
from carrier_rates.core.http_client import HTTPClient
from carrier_rates.core.token_cache import InMemoryTokenCache
from carrier_rates.modules.shipping.carriers import CarrierAdapter, UPSAdapter
from carrier_rates.schemas.rates import Rate, RateRequest, RateResponse
from carrier_rates.services.ups_client import UPSAuthProvider, UPSClient

logger = logging.getLogger(__name__)


@dataclass
class CarrierFailure:
    """A carrier that failed during a comparison."""
    carrier: str
    error: CarrierError

    def to_dict(self) -> Dict[str, Any]:
        return {"carrier": self.carrier, **self.error.to_dict()}


@dataclass
class RateComparison:
    """
    Outcome of querying every registered carrier.

    responses holds successful carriers in registration order; failures
    tells "carrier failed" apart from "carrier returned no rates".
    """
    responses: List[RateResponse] = field(default_factory=list)
    failures: List[CarrierFailure] = field(default_factory=list)

    @property
    def failed_carriers(self) -> List[str]:
        return [f.carrier for f in self.failures]

    def cheapest(self) -> Optional[Tuple[str, Rate]]:
        """Lowest total cost across all carriers, as (carrier, rate)."""
        candidates = [
            (response.carrier, rate)
            for response in self.responses
            for rate in response.rates
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda c: c[1].total_cost)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "responses": [r.model_dump(by_alias=True, mode="json") for r in self.responses],
            "failures": [f.to_dict() for f in self.failures],
        }


class CarrierService:
    """
    Aggregates rate quotes across carriers.

    Registering a name that already exists replaces the earlier adapter.
    """

    def __init__(self, adapters: Optional[Mapping[str, CarrierAdapter]] = None):
        self._adapters: Dict[str, CarrierAdapter] = {}
        for name, adapter in (adapters or {}).items():
            self.register(name, adapter)

    def register(self, name: str, adapter: CarrierAdapter) -> None:
        key = name.strip().upper()
        if not key:
            raise ValueError("Carrier name must not be empty")

        if key in self._adapters:
            logger.warning(f"Carrier '{key}' already registered, replacing")

        self._adapters[key] = adapter
        logger.info(f"Registered carrier: {key} -> {adapter.__class__.__name__}")

    def get_supported_carriers(self) -> List[str]:
        return list(self._adapters.keys())

    def _get_adapter(self, carrier: str) -> CarrierAdapter:
        adapter = self._adapters.get(carrier.strip().upper())
        if adapter is None:
            raise CarrierNotSupportedError(carrier, self.get_supported_carriers())
        return adapter

    async def get_rates(self, carrier: str, request: RateRequest) -> RateResponse:
        """
        Get rates from one carrier.

        Raises:
            CarrierNotSupportedError: carrier is not registered
            CarrierError: whatever the adapter raised, unchanged
        """
        adapter = self._get_adapter(carrier)
        return await adapter.get_rates(request)

    async def compare_rates(self, request: RateRequest) -> List[RateResponse]:
        """Rates from every carrier that answered; failed carriers are omitted."""
        comparison = await self.compare_rates_detailed(request)
        return comparison.responses

    async def compare_rates_detailed(self, request: RateRequest) -> RateComparison:
        """
        Query every registered carrier concurrently.

        All calls are started before any is awaited, and the comparison
        returns only after each one has succeeded or failed.
        """
        comparison = RateComparison()
        if not self._adapters:
            logger.warning("No carriers registered for rate comparison")
            return comparison

        names = list(self._adapters.keys())
        outcomes = await asyncio.gather(
            *(self._adapters[name].get_rates(request) for name in names),
            return_exceptions=True,
        )

        for name, outcome in zip(names, outcomes):
            if not isinstance(outcome, BaseException):
                comparison.responses.append(outcome)
                continue

            if not isinstance(outcome, Exception):
                # CancelledError and friends are not carrier failures
                raise outcome

            error = outcome
            if not isinstance(error, CarrierError):
                error = CarrierAPIError(
                    f"Unexpected error from {name}",
                    details={"error": f"{outcome.__class__.__name__}: {outcome}"},
                )
            logger.warning(f"Failed to get rates from {name}: {error.message}")
            comparison.failures.append(CarrierFailure(carrier=name, error=error))

        logger.info(
            f"Rate comparison: {len(comparison.responses)} succeeded, "
            f"{len(comparison.failures)} failed"
        )
        return comparison

    async def close(self):
        """Close adapters that hold network resources."""
        for adapter in self._adapters.values():
            close = getattr(adapter, "close", None)
            if close is not None:
                await close()


def create_carrier_service(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    token_cache: Optional[InMemoryTokenCache] = None,
) -> CarrierService:
    """
    Wire up the default service with UPS registered.

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        transport: Optional httpx transport (httpx.MockTransport in tests)
        token_cache: Optional shared cache; a new one is created otherwise
    """
    settings = settings or default_settings
    token_cache = token_cache or InMemoryTokenCache()

    http_client = HTTPClient(
        settings.UPS_BASE_URL,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    )
    auth_provider = UPSAuthProvider(
        http_client,
        token_cache,
        client_id=settings.UPS_CLIENT_ID,
        client_secret=settings.UPS_CLIENT_SECRET,
    )
    ups_client = UPSClient(http_client, auth_provider, transaction_src=settings.UPS_TRANSACTION_SRC)
    ups_adapter = UPSAdapter(ups_client, account_number=settings.UPS_ACCOUNT_NUMBER)

    return CarrierService({"UPS": ups_adapter})
