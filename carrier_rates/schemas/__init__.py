from carrier_rates.schemas.rates import (
    Address,
    DimensionUnit,
    Package,
    Rate,
    RateRequest,
    RateResponse,
    ServiceLevel,
    WeightUnit,
    validate_rate_request,
)

__all__ = [
    "Address",
    "DimensionUnit",
    "Package",
    "Rate",
    "RateRequest",
    "RateResponse",
    "ServiceLevel",
    "WeightUnit",
    "validate_rate_request",
]
