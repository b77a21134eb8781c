"""Timestamp and duration value types with fixed wire shapes.

The ingestion service wants a timestamp as an RFC 3339 string with
nanosecond precision and a duration as a protobuf-style ``{seconds, nanos}``
object. Python's ``datetime`` only carries microseconds and ``timedelta`` has
no such JSON shape, so both are wrapped here with their own ``to_wire``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

from google.protobuf.duration_pb2 import Duration as ProtoDuration
from google.protobuf.timestamp_pb2 import Timestamp as ProtoTimestamp

NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MICRO = 1_000
_SECONDS_PER_DAY = 86_400
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _format_offset(offset: timedelta | None) -> str:
    """Render a UTC offset as ``Z`` or ``+hh:mm`` / ``-hh:mm``."""
    if not offset:
        return "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, remainder = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}:{remainder // 60:02d}"


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Time:
    """A point in time with nanosecond precision.

    ``moment`` carries the instant and its time zone; ``nanos`` adds a
    sub-second offset on top of it. On construction any microseconds in
    ``moment`` are folded into ``nanos`` and whole seconds of ``nanos``
    (including negative values) are carried into ``moment``, leaving
    ``moment.microsecond == 0`` and ``0 <= nanos < 10**9``. A naive
    ``moment`` is read as UTC.
    """

    moment: datetime
    nanos: int = 0

    def __post_init__(self) -> None:
        total = self.moment.microsecond * _NANOS_PER_MICRO + self.nanos
        carry, remainder = divmod(total, NANOS_PER_SECOND)
        moment = self.moment.replace(microsecond=0)
        if carry:
            moment += timedelta(seconds=carry)
        object.__setattr__(self, "moment", moment)
        object.__setattr__(self, "nanos", remainder)

    @classmethod
    def from_datetime(cls, value: datetime) -> Time:
        """Wrap a ``datetime``, keeping its zone and microseconds."""
        return cls(moment=value)

    @classmethod
    def from_unix_nanos(cls, nanos: int, tz: tzinfo | None = timezone.utc) -> Time:
        """Build a Time from nanoseconds since the Unix epoch.

        Args:
            nanos: Nanoseconds since 1970-01-01T00:00:00Z.
            tz: Zone to express the instant in. ``None`` uses the local
                system zone.
        """
        seconds, remainder = divmod(nanos, NANOS_PER_SECOND)
        moment = (_EPOCH + timedelta(seconds=seconds)).astimezone(tz)
        return cls(moment=moment, nanos=remainder)

    @classmethod
    def from_proto(cls, timestamp: ProtoTimestamp, tz: tzinfo | None = timezone.utc) -> Time:
        return cls.from_unix_nanos(timestamp.ToNanoseconds(), tz)

    @classmethod
    def now(cls, tz: tzinfo | None = timezone.utc) -> Time:
        return cls.from_datetime(datetime.now(tz).astimezone(tz))

    def unix_nanos(self) -> int:
        """Return the instant as nanoseconds since the Unix epoch."""
        moment = self.moment
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        delta = moment - _EPOCH
        seconds = delta.days * _SECONDS_PER_DAY + delta.seconds
        return seconds * NANOS_PER_SECOND + self.nanos

    def to_proto(self) -> ProtoTimestamp:
        timestamp = ProtoTimestamp()
        timestamp.FromNanoseconds(self.unix_nanos())
        return timestamp

    def to_wire(self) -> str:
        """Format as RFC 3339 with up to nine fractional digits.

        Trailing zeros of the fraction are trimmed and a zero fraction is
        left out, e.g. ``2024-01-02T03:04:05.123456789Z`` or
        ``2024-01-02T12:04:05+09:00``. The zone of ``moment`` is kept.
        """
        m = self.moment
        text = (
            f"{m.year:04d}-{m.month:02d}-{m.day:02d}"
            f"T{m.hour:02d}:{m.minute:02d}:{m.second:02d}"
        )
        if self.nanos:
            text += "." + f"{self.nanos:09d}".rstrip("0")
        return text + _format_offset(m.utcoffset())


# ---------------------------------------------------------------------------
# Duration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Duration:
    """A signed span of time counted in nanoseconds."""

    nanoseconds: int = 0

    @classmethod
    def from_timedelta(cls, value: timedelta) -> Duration:
        seconds = value.days * _SECONDS_PER_DAY + value.seconds
        return cls(seconds * NANOS_PER_SECOND + value.microseconds * _NANOS_PER_MICRO)

    @classmethod
    def from_seconds(cls, seconds: float) -> Duration:
        return cls(round(seconds * NANOS_PER_SECOND))

    @classmethod
    def from_proto(cls, duration: ProtoDuration) -> Duration:
        return cls(duration.ToNanoseconds())

    def to_proto(self) -> ProtoDuration:
        duration = ProtoDuration()
        duration.FromNanoseconds(self.nanoseconds)
        return duration

    def to_wire(self) -> dict[str, int]:
        """Return the ``{"seconds": ..., "nanos": ...}`` object.

        Seconds are truncated toward zero and ``nanos`` carries the
        remainder, so both parts share the sign of the whole duration:
        -1.5s is ``{"seconds": -1, "nanos": -500000000}``.
        """
        seconds = abs(self.nanoseconds) // NANOS_PER_SECOND
        if self.nanoseconds < 0:
            seconds = -seconds
        return {
            "seconds": seconds,
            "nanos": self.nanoseconds - seconds * NANOS_PER_SECOND,
        }
