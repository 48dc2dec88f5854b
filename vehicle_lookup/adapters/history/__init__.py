"""Vehicle history providers."""

from vehicle_lookup.adapters.history.base import AbstractHistoryProvider
from vehicle_lookup.adapters.history.factory import create_history_provider
from vehicle_lookup.adapters.history.mock import MockHistoryProvider

__all__ = [
    "AbstractHistoryProvider",
    "MockHistoryProvider",
    "create_history_provider",
]
