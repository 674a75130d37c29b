"""
Carrier Rates

Fetches shipping rate quotes from carrier APIs, normalizes them into one
domain model and aggregates them across carriers.
"""
from carrier_rates.core.exceptions import (
    AuthenticationError,
    CarrierAPIError,
    CarrierError,
    CarrierNotSupportedError,
    NetworkError,
    RateLimitError,
    ValidationError,
)
from carrier_rates.modules.shipping.carriers import CarrierAdapter, UPSAdapter
from carrier_rates.schemas.rates import (
    Address,
    Package,
    Rate,
    RateRequest,
    RateResponse,
    ServiceLevel,
)
from carrier_rates.services.carrier_service import (
    CarrierFailure,
    CarrierService,
    RateComparison,
    create_carrier_service,
)

__version__ = "1.0.0"

__all__ = [
    "Address",
    "AuthenticationError",
    "CarrierAPIError",
    "CarrierAdapter",
    "CarrierError",
    "CarrierFailure",
    "CarrierNotSupportedError",
    "CarrierService",
    "NetworkError",
    "Package",
    "Rate",
    "RateComparison",
    "RateLimitError",
    "RateRequest",
    "RateResponse",
    "ServiceLevel",
    "UPSAdapter",
    "ValidationError",
    "create_carrier_service",
]
