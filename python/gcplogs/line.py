# One JSON object per line, in the shape the Cloud Logging agent parses.
# Special fields: https://cloud.google.com/logging/docs/agent/configuration#special-fields

from __future__ import annotations
import io, json, re
from dataclasses import dataclass
from typing import Any, Optional, Union

from .severity import Severity, severity_name
from .timefmt import NANOS_PER_SECOND, Instant, format_rfc3339_fixed_nanos, format_unix_fixed_nanos
from .tracing import SPAN_KEY, TRACE_KEY

def _check_nanos(nanos: int) -> None:
    if not 0 <= nanos < NANOS_PER_SECOND:
        raise ValueError(f"nanos must be in [0, {NANOS_PER_SECOND - 1}]: {nanos}")

def _check_value(value: str) -> None:
    if not value:
        raise ValueError("timestamp string must not be empty; leave timestamp unset instead")

@dataclass(frozen=True)
class TimestampObject:
    """Nested {"seconds": .., "nanos": ..} under "timestamp"."""
    seconds: int
    nanos: int

    def __post_init__(self) -> None:
        _check_nanos(self.nanos)

    @classmethod
    def from_instant(cls, instant: Instant) -> "TimestampObject":
        return cls(instant.seconds, instant.nanos)

    def fields(self) -> dict[str, Any]:
        return {"timestamp": {"seconds": self.seconds, "nanos": self.nanos}}

@dataclass(frozen=True)
class TimestampString:
    """A preformatted string under "timestamp"."""
    value: str

    def __post_init__(self) -> None:
        _check_value(self.value)

    @classmethod
    def from_instant(cls, instant: Instant) -> "TimestampString":
        return cls(format_rfc3339_fixed_nanos(instant))

    def fields(self) -> dict[str, Any]:
        return {"timestamp": self.value}

@dataclass(frozen=True)
class SplitTimestamp:
    """Separate "timestampSeconds" and "timestampNanos" integers."""
    seconds: int
    nanos: int

    def __post_init__(self) -> None:
        _check_nanos(self.nanos)

    @classmethod
    def from_instant(cls, instant: Instant) -> "SplitTimestamp":
        return cls(instant.seconds, instant.nanos)

    def fields(self) -> dict[str, Any]:
        return {"timestampSeconds": self.seconds, "timestampNanos": self.nanos}

@dataclass(frozen=True)
class TimeString:
    """A preformatted string under "time" (RFC3339 or unix.nanos)."""
    value: str

    def __post_init__(self) -> None:
        _check_value(self.value)

    @classmethod
    def from_instant(cls, instant: Instant, *, unix: bool = False) -> "TimeString":
        if unix:
            return cls(format_unix_fixed_nanos(instant))
        return cls(format_rfc3339_fixed_nanos(instant))

    def fields(self) -> dict[str, Any]:
        return {"time": self.value}

Timestamp = Union[TimestampObject, TimestampString, SplitTimestamp, TimeString]

@dataclass(frozen=True)
class LogLine:
    severity: Optional[Severity] = None
    message: str = ""
    trace: str = ""
    span_id: str = ""
    timestamp: Optional[Timestamp] = None
    example_key: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        rec: dict[str, Any] = {}
        if self.severity is not None:
            rec["severity"] = severity_name(self.severity)
        if self.message:
            rec["message"] = self.message
        if self.trace:
            rec[TRACE_KEY] = self.trace
        if self.span_id:
            rec[SPAN_KEY] = self.span_id
        if self.timestamp is not None:
            rec.update(self.timestamp.fields())
        if self.example_key is not None:
            rec["example_key"] = self.example_key
        return rec

def encode_line(line: LogLine) -> bytes:
    serialized = json.dumps(line.to_dict(), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    return serialized.encode("utf-8") + b"\n"

# a whole JSON string value (an object value or array element) that is digits.digits;
# keys are followed by ":" so never match
_DECIMAL_STRING = re.compile(rb'(?<=[:\[,])"(\d+\.\d+)"(?=[,}\]])')

def coerce_numeric_strings(data: bytes) -> bytes:
    """Unquote string values that are entirely a decimal, e.g. "time":"1.5" -> "time":1.5.

    Textual and best-effort: anything that is not a whole quoted value is left alone.
    """
    return _DECIMAL_STRING.sub(rb"\1", data)

def encode_line_numeric(line: LogLine) -> bytes:
    return coerce_numeric_strings(encode_line(line))

def write_line(sink: Any, line: LogLine, *, numeric: bool = False) -> None:
    """Encode line and write it to a binary or text sink."""
    data = encode_line_numeric(line) if numeric else encode_line(line)
    if isinstance(sink, io.TextIOBase):
        sink.write(data.decode("utf-8"))
    else:
        sink.write(data)