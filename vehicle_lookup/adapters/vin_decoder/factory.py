"""Factory for the configured VIN decoder."""

from vehicle_lookup.adapters.vin_decoder.base import AbstractVinDecoder
from vehicle_lookup.adapters.vin_decoder.nhtsa import NHTSAVinDecoder
from vehicle_lookup.core.config import settings
from vehicle_lookup.core.errors import ValidationAppError


def create_vin_decoder() -> AbstractVinDecoder:
    """Instantiate the VIN decoder named by ``VIN_DECODER_PROVIDER``.

    Raises:
        ValidationAppError: If the provider is unknown.
    """
    provider = settings.vin_decoder.provider.lower()

    if provider == "nhtsa":
        return NHTSAVinDecoder(
            base_url=settings.vin_decoder.base_url,
            timeout_seconds=settings.vin_decoder.timeout_seconds,
        )

    raise ValidationAppError(
        code="vin_decoder_unknown_provider",
        message=f"Unknown VIN decoder provider: '{provider}'. Supported providers: nhtsa",
        details={"provider": provider},
    )
