"""VIN decoder adapters."""

from vehicle_lookup.adapters.vin_decoder.base import AbstractVinDecoder
from vehicle_lookup.adapters.vin_decoder.factory import create_vin_decoder
from vehicle_lookup.adapters.vin_decoder.nhtsa import NHTSAVinDecoder

__all__ = [
    "AbstractVinDecoder",
    "NHTSAVinDecoder",
    "create_vin_decoder",
]
