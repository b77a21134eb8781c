"""Structured log entry with the ingestion service's special fields.

``None`` marks a field as absent; absent fields are left out of the encoded
object rather than written as null or an empty value.

See https://cloud.google.com/logging/docs/structured-logging#special-payload-fields
"""

from __future__ import annotations

from dataclasses import dataclass

from cloudlog.severity import Severity
from cloudlog.wire_types import Duration, Time


@dataclass(frozen=True)
class HTTPRequest:
    """HTTP exchange associated with a log line.

    Method, URL, status and protocol are always written out; every other
    field only when it is not ``None``. The three cache flags are
    independent of one another and of ``cache_fill_bytes``.
    """

    request_method: str = ""
    request_url: str = ""
    status: int = 0
    protocol: str = ""
    request_size: int | None = None
    response_size: int | None = None
    user_agent: str | None = None
    remote_ip: str | None = None
    referer: str | None = None
    latency: Duration | None = None
    cache_lookup: bool | None = None
    cache_hit: bool | None = None
    cache_validated_with_origin_server: bool | None = None
    cache_fill_bytes: int | None = None


@dataclass(frozen=True)
class LogEntryOperation:
    """Ties together the log lines of one long-running operation."""

    id: str | None = None
    producer: str | None = None
    first: bool | None = None
    last: bool | None = None


@dataclass(frozen=True)
class LogEntrySourceLocation:
    file: str | None = None
    line: int | None = None  # 1-based
    function: str | None = None


@dataclass(frozen=True)
class LogEntry:
    """One structured log line.

    ``severity`` accepts any integer; ordinals outside :class:`Severity`
    are encoded under the fallback name.
    """

    severity: int = Severity.DEFAULT
    message: str = ""
    http_request: HTTPRequest | None = None
    time: Time | None = None
    trace: str | None = None
    span_id: str | None = None
    operation: LogEntryOperation | None = None
    source_location: LogEntrySourceLocation | None = None
