"""Tests for sensitive data filtering and JSON log formatting."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from vehicle_lookup.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    hash_identifier,
    set_request_id,
)


@pytest.fixture
def log_stream():
    logger = logging.getLogger("test_vehicle_lookup_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_redacts_credential_headers(log_stream):
    logger, stream = log_stream

    logger.info(
        "lookup.request",
        extra={
            "headers": {"Authorization": "Bearer secret-token", "apikey": "anon-key", "content-type": "application/json"},
            "request_payload": {"vin": "1HGCM82633A123456"},
        },
    )

    output = stream.getvalue()
    assert "secret-token" not in output
    assert "anon-key" not in output
    assert "[REDACTED]" in output
    assert "application/json" in output
    assert "1HGCM82633A123456" in output


def test_redacts_top_level_sensitive_extra(log_stream):
    logger, stream = log_stream

    logger.info("event", extra={"token": "abc", "limit": 10})

    data = json.loads(stream.getvalue())
    assert data["token"] == "[REDACTED]"
    assert data["limit"] == 10


def test_json_output_includes_request_id_from_context(log_stream):
    logger, stream = log_stream
    set_request_id("req-123")

    logger.warning("rate_limit.exceeded", extra={"remaining": 0})

    data = json.loads(stream.getvalue())
    assert data["message"] == "rate_limit.exceeded"
    assert data["level"] == "warning"
    assert data["request_id"] == "req-123"
    assert data["remaining"] == 0
    assert "timestamp" in data


def test_hash_identifier_is_stable_and_opaque():
    digest = hash_identifier("203.0.113.7")

    assert digest == hash_identifier("203.0.113.7")
    assert len(digest) == 16
    assert digest != "203.0.113.7"
