"""Factory for the configured vehicle history provider."""

from vehicle_lookup.adapters.history.base import AbstractHistoryProvider
from vehicle_lookup.adapters.history.mock import MockHistoryProvider
from vehicle_lookup.core.config import settings
from vehicle_lookup.core.errors import ValidationAppError


def create_history_provider() -> AbstractHistoryProvider:
    provider = settings.history.provider.lower()

    if provider == "mock":
        return MockHistoryProvider()

    raise ValidationAppError(
        code="history_unknown_provider",
        message=f"Unknown history provider: '{provider}'. Supported providers: mock",
        details={"provider": provider},
    )
