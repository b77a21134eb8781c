"""Shared pytest fixtures for the cloudlog test suite."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import jsonschema
import pytest

from cloudlog.models import HTTPRequest, LogEntry, LogEntryOperation, LogEntrySourceLocation
from cloudlog.severity import Severity
from cloudlog.wire_types import Duration, Time

SCHEMA_PATH = Path(__file__).parent / "schemas" / "log_entry.schema.json"


@pytest.fixture()
def wire_validator() -> jsonschema.Draft202012Validator:
    """Return a validator for the encoded log line shape."""
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema = json.load(f)
    return jsonschema.Draft202012Validator(schema)


@pytest.fixture()
def known_time() -> Time:
    """2024-01-02T03:04:05.123456789Z."""
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    return Time(moment=moment, nanos=123_456_789)


@pytest.fixture()
def full_http_request() -> HTTPRequest:
    """Return an HTTPRequest with every field set."""
    return HTTPRequest(
        request_method="POST",
        request_url="https://example.com/api/v1/orders",
        status=201,
        protocol="HTTP/2",
        request_size=1024,
        response_size=256,
        user_agent="Mozilla/5.0",
        remote_ip="198.51.100.23",
        referer="https://example.com/cart",
        latency=Duration.from_timedelta(timedelta(milliseconds=1500)),
        cache_lookup=True,
        cache_hit=False,
        cache_validated_with_origin_server=True,
        cache_fill_bytes=4096,
    )


@pytest.fixture()
def full_entry(full_http_request: HTTPRequest, known_time: Time) -> LogEntry:
    """Return a LogEntry with every optional field set."""
    return LogEntry(
        severity=Severity.WARNING,
        message="Order placed with slow upstream",
        http_request=full_http_request,
        time=known_time,
        trace="projects/demo/traces/abc123",
        span_id="000000000000004a",
        operation=LogEntryOperation(id="op-1", producer="orders", first=True, last=False),
        source_location=LogEntrySourceLocation(file="orders/api.py", line=42, function="create"),
    )


@pytest.fixture()
def make_record():
    """Return a factory for stdlib LogRecords."""

    def _make(
        msg: str = "hello",
        level: int = logging.INFO,
        args: tuple = (),
        exc_info=None,
        **extra: object,
    ) -> logging.LogRecord:
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="/srv/app/handlers.py",
            lineno=17,
            msg=msg,
            args=args,
            exc_info=exc_info,
            func="handle",
        )
        record.created = 1704164645.5
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    return _make
