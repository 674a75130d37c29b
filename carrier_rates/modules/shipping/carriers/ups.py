"""
UPS Carrier Implementation

Validates the domain request, maps it to a UPS RateRequest body, posts it
through UPSClient and maps each RatedShipment back to a Rate.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from carrier_rates.core.exceptions import CarrierAPIError, CarrierError, ValidationError
from carrier_rates.modules.shipping.carriers.base import CarrierAdapter
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
from carrier_rates.services.ups_client import RATING_PATH, UPSClient

logger = logging.getLogger(__name__)

CUSTOMER_CONTEXT = "Rating Request"
PACKAGING_TYPE_CUSTOMER_SUPPLIED = "02"

# Requested service level -> UPS service code
UPS_SERVICE_CODES = {
    ServiceLevel.GROUND: "03",
    ServiceLevel.EXPRESS: "02",
    ServiceLevel.TWO_DAY: "02",
    ServiceLevel.OVERNIGHT: "01",
}

# UPS service code -> (service level, service name)
UPS_SERVICE_MAP = {
    "01": (ServiceLevel.OVERNIGHT, "UPS Next Day Air"),
    "02": (ServiceLevel.EXPRESS, "UPS 2nd Day Air"),
    "03": (ServiceLevel.GROUND, "UPS Ground"),
    "12": (ServiceLevel.TWO_DAY, "UPS 3 Day Select"),
}

# Unrecognized service codes
UPS_FALLBACK_SERVICE = (ServiceLevel.GROUND, "UPS Standard")

UPS_WEIGHT_UNITS = {
    WeightUnit.LBS: "LBS",
    WeightUnit.KG: "KGS",
}

UPS_DIMENSION_UNITS = {
    DimensionUnit.IN: "IN",
    DimensionUnit.CM: "CM",
}


def _format_number(value: float) -> str:
    """UPS wants numbers as strings; drop a trailing .0 on whole values."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _as_list(value: Any) -> List[Any]:
    """UPS returns a bare object instead of a one-element list."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return list(value)


# ==================== Request mapping ====================


def to_ups_address(address: Address) -> Dict[str, Any]:
    return {
        "Address": {
            "AddressLine": [address.street],
            "City": address.city,
            "StateProvinceCode": address.state,
            "PostalCode": address.zip_code,
            "CountryCode": address.country,
        },
    }


def to_ups_package(package: Package) -> Dict[str, Any]:
    return {
        "PackagingType": {"Code": PACKAGING_TYPE_CUSTOMER_SUPPLIED},
        "Dimensions": {
            "UnitOfMeasurement": {"Code": UPS_DIMENSION_UNITS[package.dimension_unit]},
            "Length": _format_number(package.length),
            "Width": _format_number(package.width),
            "Height": _format_number(package.height),
        },
        "PackageWeight": {
            "UnitOfMeasurement": {"Code": UPS_WEIGHT_UNITS[package.weight_unit]},
            "Weight": _format_number(package.weight),
        },
    }


def to_ups_rate_request(request: RateRequest, account_number: Optional[str] = None) -> Dict[str, Any]:
    """Build the UPS RateRequest body. Pure; no I/O."""
    shipper = to_ups_address(request.origin)
    if account_number:
        shipper["ShipperNumber"] = account_number

    shipment: Dict[str, Any] = {
        "Shipper": shipper,
        "ShipTo": to_ups_address(request.destination),
        "ShipFrom": to_ups_address(request.origin),
        "Package": to_ups_package(request.package),
    }

    if request.service_level:
        shipment["Service"] = {"Code": UPS_SERVICE_CODES[request.service_level]}
        request_option = "Rate"
    else:
        # Shop returns every available service
        request_option = "Shop"

    return {
        "RateRequest": {
            "Request": {
                "RequestOption": request_option,
                "TransactionReference": {"CustomerContext": CUSTOMER_CONTEXT},
            },
            "Shipment": shipment,
        }
    }


# ==================== Response mapping ====================


def map_service_code(code: Optional[str]):
    """Return (service level, service name) for a UPS service code."""
    return UPS_SERVICE_MAP.get(code or "", UPS_FALLBACK_SERVICE)


def to_rate(rated_shipment: Dict[str, Any]) -> Rate:
    service_code = rated_shipment.get("Service", {}).get("Code")
    service_level, service_name = map_service_code(service_code)
    total = rated_shipment["TotalCharges"]

    delivery_days = None
    business_days = (
        rated_shipment.get("TimeInTransit", {})
        .get("ServiceSummary", {})
        .get("EstimatedArrival", {})
        .get("BusinessDaysInTransit")
    )
    if business_days is not None and business_days != "":
        delivery_days = int(business_days)

    return Rate(
        service_level=service_level,
        service_name=service_name,
        total_cost=total["MonetaryValue"],
        currency=total["CurrencyCode"],
        delivery_days=delivery_days,
    )


def to_rate_response(ups_response: Dict[str, Any]) -> RateResponse:
    rate_response = ups_response["RateResponse"]
    rated_shipments = _as_list(rate_response.get("RatedShipment"))

    request_id = (
        rate_response.get("Response", {})
        .get("TransactionReference", {})
        .get("CustomerContext")
    )

    return RateResponse(
        carrier=UPSAdapter.carrier_name,
        rates=[to_rate(rs) for rs in rated_shipments],
        request_id=request_id,
    )


# ==================== Adapter ====================


class UPSAdapter(CarrierAdapter):
    """UPS rating through the v2403 Rating API."""

    carrier_name = "UPS"

    def __init__(self, client: UPSClient, account_number: Optional[str] = None):
        self.client = client
        self.account_number = account_number

    async def close(self):
        await self.client.close()

    async def get_rates(self, request: RateRequest) -> RateResponse:
        try:
            request = validate_rate_request(request)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid rate request",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        ups_request = to_ups_rate_request(request, self.account_number)

        try:
            ups_response = await self.client.authenticated_post(RATING_PATH, ups_request)
        except CarrierError:
            raise
        except Exception as e:
            raise self.translate_error(e) from e

        try:
            rate_response = to_rate_response(ups_response)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"UPS rate response could not be parsed: {e.__class__.__name__}: {e}")
            raise CarrierAPIError(
                "Unexpected UPS rate response",
                details={"error": f"{e.__class__.__name__}: {e}"},
            ) from e

        logger.info(f"Got {len(rate_response.rates)} rates from UPS")
        return rate_response

    def extract_upstream_errors(self, response: httpx.Response) -> Optional[Any]:
        body = super().extract_upstream_errors(response)
        # {"response": {"errors": [{"code": ..., "message": ...}]}}
        inner = body.get("response") if isinstance(body, dict) else None
        if isinstance(inner, dict) and "errors" in inner:
            return inner["errors"]
        return body
