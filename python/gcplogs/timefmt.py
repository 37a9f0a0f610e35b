# Timestamp encodings understood by the Cloud Logging agent.
# See: https://cloud.google.com/logging/docs/agent/configuration#timestamp-processing

from __future__ import annotations
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

NANOS_PER_SECOND = 1_000_000_000

# len("2006-01-02T15:04:")
MINUTE_PREFIX_LEN = 17

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z, the range RFC3339 years cover
MIN_SECONDS = -62135596800
MAX_SECONDS = 253402300799


@dataclass(frozen=True)
class Instant:
    """An absolute point in time: whole unix seconds plus nanoseconds."""

    seconds: int
    nanos: int = 0

    def __post_init__(self) -> None:
        if not MIN_SECONDS <= self.seconds <= MAX_SECONDS:
            raise ValueError(f"seconds must be in [{MIN_SECONDS}, {MAX_SECONDS}]: {self.seconds}")
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos must be in [0, {NANOS_PER_SECOND - 1}]: {self.nanos}")

    @classmethod
    def from_ns(cls, ns: int) -> "Instant":
        seconds, nanos = divmod(ns, NANOS_PER_SECOND)
        return cls(seconds, nanos)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Naive datetimes are taken as UTC. Precision is microseconds."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        delta = dt - _EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds, delta.microseconds * 1000)

    @classmethod
    def now(cls) -> "Instant":
        return cls.from_ns(time.time_ns())

    def to_datetime(self) -> datetime:
        """UTC datetime, truncated to microseconds."""
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)


def _fixed_nanos(nanos: int) -> str:
    return f"{nanos:09d}"


def format_unix_fixed_nanos(instant: Instant) -> str:
    return f"{instant.seconds}.{_fixed_nanos(instant.nanos)}"


def format_rfc3339_fixed_nanos(instant: Instant) -> str:
    """RFC3339 with exactly nine fractional digits and a literal Z."""
    dt = _EPOCH + timedelta(seconds=instant.seconds)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{_fixed_nanos(instant.nanos)}Z"
    )


class MinuteCache:
    """Remembers the formatted prefix of the last UTC minute seen.

    Successive log lines usually land in the same minute, so only the
    seconds and nanos need formatting. NOT safe for concurrent use: two
    threads can interleave the boundary and prefix updates. Give each
    thread its own cache or lock around calls.
    """

    __slots__ = ("minute", "prefix")

    def __init__(self) -> None:
        self.minute: Optional[int] = None
        self.prefix = ""

    def reset(self) -> None:
        self.minute = None
        self.prefix = ""

    def format(self, instant: Instant) -> str:
        minute = instant.seconds - instant.seconds % 60
        if minute == self.minute and (instant.seconds > minute or instant.nanos > 0):
            return (
                f"{self.prefix}{instant.seconds - minute:02d}"
                f".{_fixed_nanos(instant.nanos)}Z"
            )

        out = format_rfc3339_fixed_nanos(instant)
        self.minute = minute
        self.prefix = out[:MINUTE_PREFIX_LEN]
        return out


# process-wide cache behind format_rfc3339_cached(); unsynchronized
_default_cache = MinuteCache()


def default_cache() -> MinuteCache:
    return _default_cache


def format_rfc3339_cached(instant: Instant, cache: Optional[MinuteCache] = None) -> str:
    """Same output as format_rfc3339_fixed_nanos, reusing the minute prefix.

    Without an explicit cache this uses a shared module-level one, which must
    not be called from several threads without external locking.
    """
    if cache is None:
        cache = _default_cache
    return cache.format(instant)
