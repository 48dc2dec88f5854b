"""Placeholder vehicle history provider (e.g., for NMVTIS or VinAudit)."""

from __future__ import annotations

import logging

from vehicle_lookup.adapters.history.base import AbstractHistoryProvider
from vehicle_lookup.schemas.lookup import VehicleHistory

logger = logging.getLogger(__name__)


class MockHistoryProvider(AbstractHistoryProvider):
    """Report a clean single-owner history for every VIN."""

    async def get_history(self, vin: str) -> VehicleHistory:
        logger.info("history.mock", extra={"vin": vin})
        return VehicleHistory(
            title="Clean",
            accidents=0,
            owners=1,
            service="Regular maintenance records available",
        )
