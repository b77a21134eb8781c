"""Encode log entries into the ingestion service's structured JSON layout."""

from __future__ import annotations

import json
from typing import Any

from cloudlog.models import (
    HTTPRequest,
    LogEntry,
    LogEntryOperation,
    LogEntrySourceLocation,
)
from cloudlog.severity import severity_name

# Qualified keys are promoted by the service to indexed LogEntry fields.
TRACE_KEY = "logging.googleapis.com/trace"
SPAN_ID_KEY = "logging.googleapis.com/spanId"
OPERATION_KEY = "logging.googleapis.com/operation"
SOURCE_LOCATION_KEY = "logging.googleapis.com/sourceLocation"


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    """Set *key* only when *value* is present."""
    if value is not None:
        target[key] = value


def _int64(value: int | None) -> str | None:
    """int64 fields travel as decimal strings."""
    if value is None:
        return None
    return str(int(value))


# ---------------------------------------------------------------------------
# Nested blocks
# ---------------------------------------------------------------------------


def encode_http_request(request: HTTPRequest) -> dict[str, Any]:
    """Encode the ``httpRequest`` block.

    Args:
        request: The HTTP exchange to encode.

    Returns:
        A dict with ``requestMethod``, ``requestUrl``, ``status`` and
        ``protocol`` always set, and every other key only when its field is
        not ``None``. ``requestSize``, ``responseSize`` and
        ``cacheFillBytes`` are decimal strings; ``latency`` is a
        ``{seconds, nanos}`` object.
    """
    encoded: dict[str, Any] = {
        "requestMethod": request.request_method,
        "requestUrl": request.request_url,
    }
    _put(encoded, "requestSize", _int64(request.request_size))
    encoded["status"] = request.status
    _put(encoded, "responseSize", _int64(request.response_size))
    _put(encoded, "userAgent", request.user_agent)
    _put(encoded, "remoteIp", request.remote_ip)
    _put(encoded, "referer", request.referer)
    if request.latency is not None:
        encoded["latency"] = request.latency.to_wire()
    _put(encoded, "cacheLookup", request.cache_lookup)
    _put(encoded, "cacheHit", request.cache_hit)
    _put(encoded, "cacheValidatedWithOriginServer", request.cache_validated_with_origin_server)
    _put(encoded, "cacheFillBytes", _int64(request.cache_fill_bytes))
    encoded["protocol"] = request.protocol
    return encoded


def encode_operation(operation: LogEntryOperation) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    _put(encoded, "id", operation.id)
    _put(encoded, "producer", operation.producer)
    _put(encoded, "first", operation.first)
    _put(encoded, "last", operation.last)
    return encoded


def encode_source_location(location: LogEntrySourceLocation) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    _put(encoded, "file", location.file)
    _put(encoded, "line", _int64(location.line))
    _put(encoded, "function", location.function)
    return encoded


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encode_entry(entry: LogEntry) -> dict[str, Any]:
    """Convert a :class:`LogEntry` into a JSON-ready dict.

    ``severity`` and ``message`` are always present. Every other key is
    written only when the matching field is set. Never raises for a
    constructible entry.
    """
    encoded: dict[str, Any] = {"severity": severity_name(entry.severity)}
    if entry.http_request is not None:
        encoded["httpRequest"] = encode_http_request(entry.http_request)
    if entry.time is not None:
        encoded["time"] = entry.time.to_wire()
    _put(encoded, TRACE_KEY, entry.trace)
    _put(encoded, SPAN_ID_KEY, entry.span_id)
    if entry.operation is not None:
        encoded[OPERATION_KEY] = encode_operation(entry.operation)
    if entry.source_location is not None:
        encoded[SOURCE_LOCATION_KEY] = encode_source_location(entry.source_location)
    encoded["message"] = entry.message
    return encoded


def encode_json(entry: LogEntry) -> str:
    """Encode *entry* as a single compact JSON line (no trailing newline)."""
    return json.dumps(encode_entry(entry), ensure_ascii=False, separators=(",", ":"))
