"""
Carrier adapters.

Each carrier implements CarrierAdapter.get_rates(); CarrierService keys
adapter instances by carrier name.
"""
from carrier_rates.modules.shipping.carriers.base import CarrierAdapter
from carrier_rates.modules.shipping.carriers.ups import UPSAdapter

__all__ = [
    "CarrierAdapter",
    "UPSAdapter",
]
