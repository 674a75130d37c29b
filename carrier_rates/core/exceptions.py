"""
Carrier Rates Exception Hierarchy

Structured exception classes for the rate aggregation engine.
All exceptions include code, message, status_code and details so that a
failure coming out of any carrier looks the same to callers.

Exception Hierarchy:
    CarrierError
    ├── ValidationError           (400)
    ├── AuthenticationError       (401)
    ├── RateLimitError            (429)
    ├── CarrierAPIError           (upstream status or None)
    ├── NetworkError              (503)
    └── CarrierNotSupportedError  (404)
"""
from typing import Optional, Dict, Any, List


class CarrierError(Exception):
    """
    Base exception for all carrier errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        status_code: HTTP-style status hint
        details: Additional context for debugging
    """

    default_code: str = "CARRIER_ERROR"
    default_status_code: Optional[int] = None

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code if status_code is not None else self.default_status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(CarrierError):
    """Malformed rate request, or upstream rejected it as a bad request."""
    default_code = "VALIDATION_ERROR"
    default_status_code = 400


class AuthenticationError(CarrierError):
    """Credential exchange failed, or upstream returned 401/403."""
    default_code = "AUTH_ERROR"
    default_status_code = 401


class RateLimitError(CarrierError):
    """Upstream returned 429."""
    default_code = "RATE_LIMIT_ERROR"
    default_status_code = 429

    def __init__(
        self,
        message: str,
        retry_after: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["retry_after"] = retry_after
        self.retry_after = retry_after
        super().__init__(message, details=details, **kwargs)


class CarrierAPIError(CarrierError):
    """Upstream 5xx or any failure that could not be classified."""
    default_code = "CARRIER_API_ERROR"


class NetworkError(CarrierError):
    """Transport-level failure, no response was received."""
    default_code = "NETWORK_ERROR"
    default_status_code = 503


class CarrierNotSupportedError(CarrierError):
    """Requested carrier is not registered."""
    default_code = "CARRIER_NOT_SUPPORTED"
    default_status_code = 404

    def __init__(self, carrier: str, available: List[str]):
        self.carrier = carrier
        self.available = list(available)
        super().__init__(
            f"Carrier {carrier} not supported. Available carriers: {', '.join(self.available)}",
            details={"carrier": carrier, "available": self.available},
        )
