"""Factory for the configured plate lookup provider."""

from vehicle_lookup.adapters.plate_lookup.base import AbstractPlateLookupProvider
from vehicle_lookup.adapters.plate_lookup.mock import MockPlateLookupProvider
from vehicle_lookup.core.config import settings
from vehicle_lookup.core.errors import ValidationAppError


def create_plate_lookup_provider() -> AbstractPlateLookupProvider:
    """Instantiate the provider named by ``PLATE_LOOKUP_PROVIDER``.

    Raises:
        ValidationAppError: If the provider is unknown.
    """
    provider = settings.plate_lookup.provider.lower()

    if provider == "mock":
        return MockPlateLookupProvider(vin=settings.plate_lookup.mock_vin or None)

    raise ValidationAppError(
        code="plate_lookup_unknown_provider",
        message=f"Unknown plate lookup provider: '{provider}'. Supported providers: mock",
        details={"provider": provider},
    )
