from __future__ import annotations

from abc import ABC, abstractmethod

from vehicle_lookup.schemas.lookup import PlateLookupResult


class AbstractPlateLookupProvider(ABC):
    """Interface for license plate registration lookups."""

    @abstractmethod
    async def lookup(self, number: str, state: str) -> PlateLookupResult:
        """Look up a plate registration.

        Args:
            number: Normalized (trimmed, uppercase) plate number.
            state: Issuing state code as sent by the client.

        Returns:
            PlateLookupResult echoing the plate, with the registered VIN when
            the provider can resolve one.
        """
        ...
