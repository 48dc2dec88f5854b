"""License plate lookup providers."""

from vehicle_lookup.adapters.plate_lookup.base import AbstractPlateLookupProvider
from vehicle_lookup.adapters.plate_lookup.factory import create_plate_lookup_provider
from vehicle_lookup.adapters.plate_lookup.mock import MockPlateLookupProvider

__all__ = [
    "AbstractPlateLookupProvider",
    "MockPlateLookupProvider",
    "create_plate_lookup_provider",
]
