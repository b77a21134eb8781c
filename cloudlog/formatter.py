"""stdlib :mod:`logging` integration: emit records as structured JSON lines."""

from __future__ import annotations

import logging
import sys
from datetime import timezone
from typing import IO

from cloudlog.config import FormatterConfig
from cloudlog.encoder import encode_json
from cloudlog.models import LogEntry, LogEntrySourceLocation
from cloudlog.severity import Severity, UnknownSeverityError, severity_for_level
from cloudlog.wire_types import NANOS_PER_SECOND, Time


def _optional_str(value: object) -> str | None:
    """Ids such as a ``uuid.UUID`` are written as their string form."""
    if value is None:
        return None
    return str(value)


class CloudLoggingFormatter(logging.Formatter):
    """Format each :class:`logging.LogRecord` as one JSON line.

    Special fields are read from record attributes, so callers attach them
    with ``extra=``::

        logger.info("served", extra={"http_request": HTTPRequest(...), "trace": "abc"})

    Recognised extras are ``severity`` (overrides the level mapping, e.g. for
    ``Severity.NOTICE`` or the name ``"NOTICE"``), ``http_request``, ``trace``,
    ``span_id``, ``operation`` and ``source_location``.
    """

    def __init__(self, config: FormatterConfig | None = None) -> None:
        super().__init__()
        self._config = config or FormatterConfig()

    def format(self, record: logging.LogRecord) -> str:
        return encode_json(self.to_entry(record))

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        """Build the :class:`LogEntry` for *record*."""
        return LogEntry(
            severity=self._severity(record),
            message=self._message(record),
            http_request=getattr(record, "http_request", None),
            time=self._time(record),
            trace=self._trace(getattr(record, "trace", None)),
            span_id=_optional_str(getattr(record, "span_id", None)),
            operation=getattr(record, "operation", None),
            source_location=self._source_location(record),
        )

    def _severity(self, record: logging.LogRecord) -> object:
        """Resolve the ``severity`` extra, else map the record level.

        A string extra is read as a severity name; an unknown name falls
        back to the level mapping. Non-integer values that are not strings
        pass through and encode under the fallback name.
        """
        severity = getattr(record, "severity", None)
        if isinstance(severity, str):
            try:
                return Severity.from_name(severity)
            except UnknownSeverityError:
                severity = None
        if severity is None:
            return severity_for_level(record.levelno)
        return severity

    def _message(self, record: logging.LogRecord) -> str:
        # Same exception/stack layout as logging.Formatter.format
        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            if message[-1:] != "\n":
                message += "\n"
            message += record.exc_text
        if record.stack_info:
            if message[-1:] != "\n":
                message += "\n"
            message += self.formatStack(record.stack_info)
        return message

    def _time(self, record: logging.LogRecord) -> Time:
        tz = None if self._config.local_time else timezone.utc
        return Time.from_unix_nanos(round(record.created * NANOS_PER_SECOND), tz)

    def _trace(self, value: object) -> str | None:
        trace = _optional_str(value)
        project_id = self._config.project_id
        if trace and project_id and not trace.startswith("projects/"):
            return f"projects/{project_id}/traces/{trace}"
        return trace

    def _source_location(self, record: logging.LogRecord) -> LogEntrySourceLocation | None:
        explicit = getattr(record, "source_location", None)
        if explicit is not None:
            return explicit
        if not self._config.include_source_location:
            return None
        return LogEntrySourceLocation(
            file=record.pathname,
            line=record.lineno,
            function=record.funcName,
        )


def configure_logging(
    level: int | str = logging.INFO,
    stream: IO[str] | None = None,
    config: FormatterConfig | None = None,
    logger: logging.Logger | None = None,
) -> logging.Handler:
    """Send a logger's output through a :class:`CloudLoggingFormatter`.

    Args:
        level: Level to set on the logger.
        stream: Destination stream, stdout by default.
        config: Formatter settings.
        logger: Logger to configure, the root logger by default. Its
            existing handlers are removed so every line is structured.

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(CloudLoggingFormatter(config))

    target = logger or logging.getLogger()
    for existing in list(target.handlers):
        target.removeHandler(existing)
        existing.close()
    target.addHandler(handler)
    target.setLevel(level)
    return handler
