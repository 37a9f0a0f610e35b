__all__ = [
    "init", "shutdown", "Config", "default_project_id", "get_logger",
    "Instant", "MinuteCache",
    "format_unix_fixed_nanos", "format_rfc3339_fixed_nanos", "format_rfc3339_cached",
    "LogLine", "TimestampObject", "TimestampString", "SplitTimestamp", "TimeString",
    "encode_line", "encode_line_numeric", "coerce_numeric_strings", "write_line",
    "Severity", "SeverityError", "severity_name",
    "Tracer", "TRACE_HEADER", "TRACE_KEY", "SPAN_KEY", "trace_from_context",
    "CloudLoggingFormatter", "with_trace",
]
__version__ = "0.1.0"

from .timefmt import (
    Instant, MinuteCache,
    format_unix_fixed_nanos, format_rfc3339_fixed_nanos, format_rfc3339_cached,
)
from .line import (
    LogLine, TimestampObject, TimestampString, SplitTimestamp, TimeString,
    encode_line, encode_line_numeric, coerce_numeric_strings, write_line,
)
from .severity import Severity, SeverityError, severity_name
from .tracing import Tracer, TRACE_HEADER, TRACE_KEY, SPAN_KEY, trace_from_context
from .logging import CloudLoggingFormatter, get_logger, with_trace
from .bootstrap import Config, init, shutdown, default_project_id
