from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from vehicle_lookup.adapters.history import create_history_provider
from vehicle_lookup.adapters.plate_lookup import create_plate_lookup_provider
from vehicle_lookup.adapters.vin_decoder import create_vin_decoder
from vehicle_lookup.core.errors import AppError, InternalAppError, ValidationAppError
from vehicle_lookup.core.rate_limit import enforce_rate_limit
from vehicle_lookup.schemas.lookup import LookupRequest, VehicleRecord
from vehicle_lookup.services.lookup_service import MISSING_INPUT_MESSAGE, LookupService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Lookup"])

_lookup_service: LookupService | None = None


def get_lookup_service() -> LookupService:
    """Return the process-wide lookup service, built from settings on first use."""

    global _lookup_service

    if _lookup_service is None:
        _lookup_service = LookupService(
            vin_decoder=create_vin_decoder(),
            plate_lookup=create_plate_lookup_provider(),
            history=create_history_provider(),
        )
    return _lookup_service


async def parse_lookup_request(request: Request) -> LookupRequest:
    """Read and validate the JSON body.

    The body is read here rather than declared as a route parameter so the
    rate limit dependency runs before any parsing, and malformed input maps
    to a 400 with the service's error shape.

    Raises:
        ValidationAppError: If the body is not JSON, not an object, or has
            non-string fields.
    """
    try:
        payload: Any = await request.json()
    except ValueError as exc:
        raise ValidationAppError(
            code="invalid_json",
            message="Request body must be valid JSON",
        ) from exc

    request.state.lookup_payload = payload
    logger.info("lookup.request", extra={"request_payload": payload})

    # A non-object body carries neither a VIN nor a plate
    if not isinstance(payload, dict):
        raise ValidationAppError(code="missing_lookup_input", message=MISSING_INPUT_MESSAGE)

    try:
        return LookupRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValidationAppError(
            code="invalid_request_body",
            message="Request body fields vin, plate and state must be strings",
            details={"context": {"errors": exc.errors(include_url=False)}},
        ) from exc


@router.post(
    "/vehicle-lookup",
    response_model=VehicleRecord,
    response_model_exclude_unset=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def vehicle_lookup(
    request: Request,
    service: Annotated[LookupService, Depends(get_lookup_service)],
) -> JSONResponse:
    """Look up a vehicle by VIN or by license plate + state.

    Body: ``{"vin": "..."}`` or ``{"plate": "...", "state": "CA"}``. A VIN
    takes precedence when both are sent.

    Returns:
        JSONResponse with the merged vehicle record (camelCase keys).

    Raises:
        ValidationAppError: 400 for missing or malformed input.
        RateLimitAppError: 429 when the client exceeded its budget.
        UpstreamAppError: 500 when the VIN decode service fails.
        InternalAppError: 500 for anything unexpected.
    """
    lookup_request = await parse_lookup_request(request)

    try:
        record = await service.lookup(lookup_request)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("lookup.unexpected_error")
        raise InternalAppError(
            code="internal_error",
            message=str(exc) or "Internal server error",
            details={"error_type": type(exc).__name__},
        ) from exc

    return JSONResponse(content=record.to_response())
