"""Vehicle lookup service orchestrating the VIN, plate, and history sources.

Flow for a single request:
1. A VIN, when present, is normalized, validated, and decoded.
2. Otherwise a plate + state pair goes to the plate provider; a VIN it
   resolves is decoded as well and its fields take precedence.
3. Whenever a VIN is known, the history report is attached.

Validation happens before any outbound call. Adapter errors propagate
unchanged; a caller never gets a partially merged record.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from vehicle_lookup.adapters.history.base import AbstractHistoryProvider
from vehicle_lookup.adapters.plate_lookup.base import AbstractPlateLookupProvider
from vehicle_lookup.adapters.vin_decoder.base import AbstractVinDecoder
from vehicle_lookup.core.errors import ValidationAppError
from vehicle_lookup.schemas.lookup import LookupRequest, VehicleRecord

logger = logging.getLogger(__name__)

VIN_LENGTH = 17

MISSING_INPUT_MESSAGE = "Either VIN or (plate + state) must be provided"

_FORBIDDEN_VIN_LETTERS = re.compile(r"[IOQ]", re.IGNORECASE)


def normalize_vin(vin: str) -> str:
    return vin.strip().upper()


def normalize_plate(plate: str) -> str:
    return plate.strip().upper()


def validate_vin(vin: str) -> None:
    """Check a normalized VIN's length and alphabet.

    Raises:
        ValidationAppError: If the VIN is not 17 characters or contains I, O, or Q.
    """
    if len(vin) != VIN_LENGTH:
        raise ValidationAppError(
            code="invalid_vin_length",
            message="VIN must be exactly 17 characters",
            details={"actual_value": len(vin)},
        )
    if _FORBIDDEN_VIN_LETTERS.search(vin):
        raise ValidationAppError(
            code="invalid_vin_characters",
            message="VIN cannot contain the letters I, O, or Q",
            details={"hint": "VINs use digits 1 and 0 instead of the letters I, O and Q"},
        )


class LookupService:
    """Resolve a lookup request into a merged vehicle record.

    Attributes:
        vin_decoder: Adapter for the external VIN decode service.
        plate_lookup: Plate registration provider.
        history: Vehicle history provider.
    """

    def __init__(
        self,
        vin_decoder: AbstractVinDecoder,
        plate_lookup: AbstractPlateLookupProvider,
        history: AbstractHistoryProvider,
    ) -> None:
        self.vin_decoder = vin_decoder
        self.plate_lookup = plate_lookup
        self.history = history

    async def lookup(self, request: LookupRequest) -> VehicleRecord:
        """Run the lookup for a VIN or a plate + state pair.

        Args:
            request: Parsed lookup request.

        Returns:
            VehicleRecord containing only the fields the sources populated.

        Raises:
            ValidationAppError: If input is missing or the VIN is malformed.
            UpstreamAppError: If the VIN decode service fails.
        """
        data: dict[str, Any] = {}
        vin_to_lookup: str | None = None

        if request.vin:
            if request.plate:
                logger.debug("lookup.plate_ignored", extra={"reason": "vin_present"})

            vin = normalize_vin(request.vin)
            validate_vin(vin)
            vin_to_lookup = vin

            decoded = await self.vin_decoder.decode(vin)
            data.update(decoded.model_dump())

        elif request.plate and request.state:
            plate_number = normalize_plate(request.plate)
            plate_result = await self.plate_lookup.lookup(plate_number, request.state)
            data.update(plate_result.model_dump())

            if plate_result.vin:
                vin_to_lookup = plate_result.vin
                decoded = await self.vin_decoder.decode(vin_to_lookup)
                data.update(decoded.model_dump())

        else:
            raise ValidationAppError(
                code="missing_lookup_input",
                message=MISSING_INPUT_MESSAGE,
            )

        if vin_to_lookup:
            history = await self.history.get_history(vin_to_lookup)
            data["history"] = history.model_dump()

        record = VehicleRecord.model_validate(data)
        logger.info(
            "lookup.completed",
            extra={
                "lookup_type": "vin" if request.vin else "plate",
                "vin_resolved": vin_to_lookup is not None,
                "has_history": record.history is not None,
            },
        )
        return record
