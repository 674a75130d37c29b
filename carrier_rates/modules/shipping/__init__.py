"""
Shipping Module

- CarrierAdapter interface for all carrier implementations
- One adapter per carrier under carriers/
"""
from carrier_rates.modules.shipping.carriers import CarrierAdapter, UPSAdapter

__all__ = [
    "CarrierAdapter",
    "UPSAdapter",
]
