"""Pydantic schemas for vehicle lookup requests and results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LookupRequest(BaseModel):
    """Lookup input: a VIN, or a license plate with its issuing state.

    Empty strings count as absent. When both a VIN and a plate are sent,
    the VIN is used and the plate ignored.
    """

    vin: str | None = Field(default=None, description="17-character VIN.")
    plate: str | None = Field(default=None, description="License plate number.")
    state: str | None = Field(default=None, description="Plate issuing state code (e.g., 'CA').")


class PlateInfo(BaseModel):
    number: str
    state: str
    expiration: str | None = None


class PlateLookupResult(BaseModel):
    """Plate echo plus the VIN the provider resolved, if any."""

    plate: PlateInfo
    vin: str | None = None


class VehicleHistory(BaseModel):
    title: str
    accidents: int
    owners: int
    service: str


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DecodedVehicle(_CamelModel):
    """Vehicle attributes decoded from a VIN.

    ``None`` means the decode service did not report the attribute.
    """

    vin: str
    make: str | None = None
    model: str | None = None
    year: str | None = None
    manufacturer: str | None = None
    vehicle_type: str | None = None
    body_class: str | None = None
    engine_configuration: str | None = None
    engine_cylinders: str | None = None
    displacement: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    drive_type: str | None = None
    doors: str | None = None
    plant_city: str | None = None
    plant_country: str | None = None


class VehicleRecord(_CamelModel):
    """Merged lookup result returned to the client.

    Only fields a lookup actually populated are serialized (see
    ``to_response``): a plate-only lookup without a VIN carries ``plate`` and
    ``vin`` and nothing else, while a decoded VIN reports every vehicle
    attribute, null when unknown.
    """

    vin: str | None = None
    make: str | None = None
    model: str | None = None
    year: str | None = None
    manufacturer: str | None = None
    vehicle_type: str | None = None
    body_class: str | None = None
    engine_configuration: str | None = None
    engine_cylinders: str | None = None
    displacement: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    drive_type: str | None = None
    doors: str | None = None
    plant_city: str | None = None
    plant_country: str | None = None
    plate: PlateInfo | None = None
    history: VehicleHistory | None = None

    def to_response(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping fields no source populated."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
