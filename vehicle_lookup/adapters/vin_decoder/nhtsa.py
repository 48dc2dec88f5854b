"""NHTSA vPIC VIN decoder adapter.

vPIC answers ``GET /DecodeVin/{vin}?format=json`` with a flat list of
``{"VariableId": ..., "Value": ...}`` entries; this adapter picks the
attributes we expose by variable id.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import httpx

from vehicle_lookup.adapters.vin_decoder.base import AbstractVinDecoder
from vehicle_lookup.core.errors import UpstreamAppError
from vehicle_lookup.schemas.lookup import DecodedVehicle

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVin"

UPSTREAM_ERROR_MESSAGE = "Failed to decode VIN from NHTSA"

# vPIC VariableId -> DecodedVehicle field
NHTSA_VARIABLE_FIELDS: dict[int, str] = {
    5: "body_class",
    9: "engine_cylinders",
    10: "vehicle_type",
    11: "displacement",
    14: "doors",
    15: "drive_type",
    24: "fuel_type",
    26: "make",
    27: "manufacturer",
    28: "model",
    29: "year",
    31: "plant_city",
    37: "transmission",
    64: "engine_configuration",
    75: "plant_country",
}


def map_decode_results(results: Iterable[Mapping[str, Any]]) -> dict[str, str | None]:
    """Map vPIC result entries to DecodedVehicle field values.

    The first entry for a variable id wins. Missing ids and empty values map
    to None rather than an empty string.

    Args:
        results: The ``Results`` list of a vPIC response.

    Returns:
        Dict with every mapped field name as key.
    """
    values: dict[int, Any] = {}
    for item in results:
        if not isinstance(item, Mapping):
            continue
        variable_id = item.get("VariableId")
        if variable_id in NHTSA_VARIABLE_FIELDS and variable_id not in values:
            values[variable_id] = item.get("Value")

    fields: dict[str, str | None] = {}
    for variable_id, field_name in NHTSA_VARIABLE_FIELDS.items():
        value = values.get(variable_id)
        fields[field_name] = str(value) if value not in (None, "") else None
    return fields


class NHTSAVinDecoder(AbstractVinDecoder):
    """Decode VINs with the public NHTSA vPIC API.

    A fresh ``httpx.AsyncClient`` is used per call with a bounded timeout;
    there are no retries.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the decoder.

        Args:
            base_url: DecodeVin endpoint; the VIN is appended as a path segment.
            timeout_seconds: Timeout for the whole outbound request.
            transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _upstream_error(self, vin: str, url: str, exc: Exception | None = None, **details: Any) -> UpstreamAppError:
        logger.error(
            "vin_decoder.failed",
            extra={
                "vin": vin,
                "upstream_url": url,
                "error_type": type(exc).__name__ if exc else None,
                "error_msg": str(exc) if exc else None,
                **details,
            },
        )
        return UpstreamAppError(
            code="vin_decode_failed",
            message=UPSTREAM_ERROR_MESSAGE,
            details={"vin": vin, "upstream_url": url, **details},
        )

    async def decode(self, vin: str) -> DecodedVehicle:
        url = f"{self.base_url}/{vin}"
        logger.info("vin_decoder.request", extra={"vin": vin})

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params={"format": "json"})
        except httpx.HTTPError as exc:
            raise self._upstream_error(vin, url, exc) from exc

        if not response.is_success:
            raise self._upstream_error(vin, url, upstream_status=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise self._upstream_error(vin, url, exc) from exc

        if not isinstance(payload, dict):
            raise self._upstream_error(vin, url, error_type="unexpected_payload")

        fields = map_decode_results(payload.get("Results") or [])
        logger.info(
            "vin_decoder.success",
            extra={
                "vin": vin,
                "fields_reported": sum(1 for v in fields.values() if v is not None),
            },
        )
        return DecodedVehicle(vin=vin, **fields)
