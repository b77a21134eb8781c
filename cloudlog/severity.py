"""Cloud Logging severity levels and their wire names."""

from __future__ import annotations

import logging
from enum import IntEnum


class UnknownSeverityError(ValueError):
    """Raised when a severity name is not one of the canonical names."""


class Severity(IntEnum):
    """Ordinal log levels of the ingestion service's ``LogSeverity`` enum.

    See https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#logseverity
    """

    DEFAULT = 0
    DEBUG = 100
    INFO = 200
    NOTICE = 300
    WARNING = 400
    ERROR = 500
    CRITICAL = 600
    ALERT = 700
    EMERGENCY = 800

    @classmethod
    def from_name(cls, name: str) -> Severity:
        """Return the member for a canonical severity name.

        Args:
            name: One of the nine canonical names, case-insensitive.

        Returns:
            The matching :class:`Severity`.

        Raises:
            UnknownSeverityError: If *name* is not a canonical name.
        """
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise UnknownSeverityError(
                f"Unknown severity name: '{name}'"
            ) from None


# Names looked up by ordinal; anything missing falls back to "ERROR".
_NAMES: dict[int, str] = {member.value: member.name for member in Severity}
_FALLBACK_NAME = "ERROR"


def severity_name(value: object) -> str:
    """Return the wire name for a severity ordinal.

    Every value has a name: integers outside the canonical set (negative,
    between levels, above 800) and anything that is not an ``int`` at all
    are reported as ``"ERROR"``.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        return _FALLBACK_NAME
    return _NAMES.get(value, _FALLBACK_NAME)


# ---------------------------------------------------------------------------
# stdlib logging bridge
# ---------------------------------------------------------------------------

_LEVEL_TO_SEVERITY: tuple[tuple[int, Severity], ...] = (
    (logging.CRITICAL, Severity.CRITICAL),
    (logging.ERROR, Severity.ERROR),
    (logging.WARNING, Severity.WARNING),
    (logging.INFO, Severity.INFO),
    (logging.DEBUG, Severity.DEBUG),
)


def severity_for_level(levelno: int) -> Severity:
    """Map a :mod:`logging` level number to a :class:`Severity`.

    Custom levels between the standard ones round down to the nearest
    standard level at or below them. ``NOTSET`` and anything below
    ``DEBUG`` map to ``DEFAULT``.
    """
    for threshold, severity in _LEVEL_TO_SEVERITY:
        if levelno >= threshold:
            return severity
    return Severity.DEFAULT
