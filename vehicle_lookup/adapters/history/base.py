from __future__ import annotations

from abc import ABC, abstractmethod

from vehicle_lookup.schemas.lookup import VehicleHistory


class AbstractHistoryProvider(ABC):
    """Interface for vehicle history reports (title, accidents, owners)."""

    @abstractmethod
    async def get_history(self, vin: str) -> VehicleHistory:
        ...
