"""VIN decoder interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from vehicle_lookup.schemas.lookup import DecodedVehicle


class AbstractVinDecoder(ABC):
    """Interface for services that turn a VIN into vehicle attributes."""

    @abstractmethod
    async def decode(self, vin: str) -> DecodedVehicle:
        """Decode a normalized 17-character VIN.

        Args:
            vin: Normalized (trimmed, uppercase) VIN.

        Returns:
            DecodedVehicle with unreported attributes set to None.

        Raises:
            UpstreamAppError: If the decode service fails or is unreachable.
        """
        ...
