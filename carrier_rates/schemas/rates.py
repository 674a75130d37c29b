"""
Rate Schemas

Pydantic models for the carrier-agnostic rate request and response.
Fields are snake_case in Python and camelCase on the wire
(zipCode, weightUnit, serviceLevel, totalCost, ...); both spellings are
accepted on input.
"""
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WeightUnit(str, Enum):
    LBS = "LBS"
    KG = "KG"


class DimensionUnit(str, Enum):
    IN = "IN"
    CM = "CM"


class ServiceLevel(str, Enum):
    """Carrier-agnostic service tiers."""
    GROUND = "GROUND"
    EXPRESS = "EXPRESS"
    TWO_DAY = "2DAY"
    OVERNIGHT = "OVERNIGHT"


class DomainModel(BaseModel):
    """Immutable value object; instances are validated again when reused."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        revalidate_instances="always",
    )


# ==================== Request Schemas ====================


class Address(DomainModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=2, max_length=2, description="e.g. CA, NY")
    zip_code: str = Field(..., min_length=5)
    country: str = Field(..., min_length=2, max_length=2, description="2-letter ISO code, e.g. US")


class Package(DomainModel):
    weight: float = Field(..., gt=0)
    weight_unit: WeightUnit
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    dimension_unit: DimensionUnit


class RateRequest(DomainModel):
    """Request rates for one package between two addresses."""
    origin: Address
    destination: Address
    package: Package
    service_level: Optional[ServiceLevel] = None


# ==================== Response Schemas ====================


class Rate(DomainModel):
    """A single quoted service option."""
    service_level: ServiceLevel
    service_name: str
    total_cost: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=3, max_length=3)
    delivery_days: Optional[int] = Field(None, ge=0)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v):
        return v.upper()


class RateResponse(DomainModel):
    """Rates returned by one carrier, in the order the carrier reported them."""
    carrier: str
    rates: List[Rate] = Field(default_factory=list)
    request_id: Optional[str] = None


def validate_rate_request(data: Any) -> RateRequest:
    """
    Parse and validate a rate request.

    Accepts a RateRequest instance or a mapping using either field spelling.

    Raises:
        pydantic.ValidationError: if any field is missing or out of range
    """
    return RateRequest.model_validate(data)
