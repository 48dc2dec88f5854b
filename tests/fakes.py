"""In-process stand-ins for the lookup adapters."""

from __future__ import annotations

from vehicle_lookup.adapters.history.base import AbstractHistoryProvider
from vehicle_lookup.adapters.plate_lookup.base import AbstractPlateLookupProvider
from vehicle_lookup.adapters.vin_decoder.base import AbstractVinDecoder
from vehicle_lookup.schemas.lookup import (
    DecodedVehicle,
    PlateInfo,
    PlateLookupResult,
    VehicleHistory,
)


class FakeVinDecoder(AbstractVinDecoder):
    """Records calls and returns a partially populated decode."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.error = error

    async def decode(self, vin: str) -> DecodedVehicle:
        self.calls.append(vin)
        if self.error is not None:
            raise self.error
        return DecodedVehicle(
            vin=vin,
            make="HONDA",
            model="Accord",
            year="2003",
            body_class="Coupe",
            engine_cylinders="6",
        )


class FakePlateLookup(AbstractPlateLookupProvider):
    def __init__(self, vin: str | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self.vin = vin

    async def lookup(self, number: str, state: str) -> PlateLookupResult:
        self.calls.append((number, state))
        return PlateLookupResult(
            plate=PlateInfo(number=number, state=state, expiration="12/2025"),
            vin=self.vin,
        )


class FakeHistory(AbstractHistoryProvider):
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def get_history(self, vin: str) -> VehicleHistory:
        self.calls.append(vin)
        return VehicleHistory(title="Clean", accidents=0, owners=2, service="Dealer serviced")


