# Writes one line per timestamp encoding to stderr, to compare what Cloud Logging accepts.
import sys

from gcplogs import (
    Instant, LogLine, Severity, SplitTimestamp, TimeString, TimestampObject, TimestampString,
    Tracer, default_project_id, format_rfc3339_cached, format_unix_fixed_nanos, write_line,
)

def main():
    tracer = Tracer(default_project_id())
    trace = tracer.from_header("105445aa7843bc8bf206b120001000/0;o=1")
    now = Instant.now()

    line = LogLine(Severity.DEBUG, "debug with timestamp object (works)", trace,
                   timestamp=TimestampObject.from_instant(now))
    write_line(sys.stderr, line)

    line = LogLine(Severity.INFO, "info with time unix.nanos string (does not work)", trace,
                   timestamp=TimeString.from_instant(now, unix=True))
    write_line(sys.stderr, line)

    line = LogLine(Severity.INFO, "info with time unix.nanos float (does not work)", trace,
                   timestamp=TimeString.from_instant(now, unix=True))
    write_line(sys.stderr, line, numeric=True)

    line = LogLine(Severity.WARNING, "warning with timestampSeconds/timestampNanos (works)", trace,
                   timestamp=SplitTimestamp.from_instant(now))
    write_line(sys.stderr, line)

    line = LogLine(Severity.ERROR, "error with time in RFC3339 (works)", trace,
                   timestamp=TimeString(format_rfc3339_cached(now)))
    write_line(sys.stderr, line)

    line = LogLine(Severity.DEBUG, "debug with timestamp unix.nanos string (does not work)", trace,
                   timestamp=TimestampString(format_unix_fixed_nanos(now)))
    write_line(sys.stderr, line)

    line = LogLine(Severity.INFO, "info with example structured key", trace,
                   timestamp=TimestampObject.from_instant(now), example_key=42)
    write_line(sys.stderr, line)

if __name__ == "__main__":
    main()
