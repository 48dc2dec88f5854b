"""Placeholder plate lookup provider.

Stands in for a paid plate-to-VIN service until one is integrated.
"""

from __future__ import annotations

import logging

from vehicle_lookup.adapters.plate_lookup.base import AbstractPlateLookupProvider
from vehicle_lookup.schemas.lookup import PlateInfo, PlateLookupResult

logger = logging.getLogger(__name__)

MOCK_EXPIRATION = "12/2025"


class MockPlateLookupProvider(AbstractPlateLookupProvider):
    """Return a fixed registration for any plate.

    Args:
        vin: VIN to report for every plate; None (the default) means the
            plate could not be resolved to a vehicle.
    """

    def __init__(self, vin: str | None = None) -> None:
        self.vin = vin

    async def lookup(self, number: str, state: str) -> PlateLookupResult:
        logger.info(
            "plate_lookup.mock",
            extra={"plate_state": state, "vin_resolved": self.vin is not None},
        )
        return PlateLookupResult(
            plate=PlateInfo(number=number, state=state, expiration=MOCK_EXPIRATION),
            vin=self.vin,
        )
