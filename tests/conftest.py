"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that builds settings.
"""

import os

os.environ["APP_ENV"] = "testing"
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "10")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_SECONDS", "60")
os.environ.setdefault("VIN_DECODER_BASE_URL", "https://vpic.test/api/vehicles/DecodeVin")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from fakes import FakeHistory, FakePlateLookup, FakeVinDecoder
from vehicle_lookup.core import rate_limit as rate_limit_module


@pytest.fixture(autouse=True)
def reset_rate_limiter(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give every test a fresh process-wide limiter."""
    monkeypatch.setattr(rate_limit_module, "_limiter", None)
    monkeypatch.setattr(rate_limit_module, "_limiter_config", None)


@pytest.fixture
def vin_decoder() -> FakeVinDecoder:
    return FakeVinDecoder()


@pytest.fixture
def plate_lookup() -> FakePlateLookup:
    return FakePlateLookup()


@pytest.fixture
def history() -> FakeHistory:
    return FakeHistory()
