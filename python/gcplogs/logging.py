# Cloud Logging output for the stdlib logging module, plus the package-level facade.

from __future__ import annotations
import logging, sys, threading
from typing import Any, Mapping, Optional, Protocol, Union

from .line import LogLine, TimeString, encode_line
from .severity import Severity, from_logging_level
from .timefmt import Instant, MinuteCache
from .tracing import Tracer, trace_from_context


def _instant_from_created(created: float) -> Instant:
    # LogRecord.created is a float; microseconds survive the round trip
    return Instant.from_ns(round(created * 1_000_000) * 1000)


class CloudLoggingFormatter(logging.Formatter):
    """Formats records as single-line JSON for the Cloud Logging agent.

    Exceptions and stack info are appended to "message" so Error Reporting
    picks them up. "time" uses the cached RFC3339 encoding with one cache per
    thread. The trace comes from a ``trace`` record attribute (see
    with_trace()) or, when project_id is set, from the active OpenTelemetry
    span.
    """

    def __init__(self, project_id: str = "") -> None:
        super().__init__()
        self.project_id = project_id
        self._local = threading.local()

    def _cache(self) -> MinuteCache:
        cache = getattr(self._local, "cache", None)
        if cache is None:
            cache = self._local.cache = MinuteCache()
        return cache

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message += "\n" + record.exc_text
        if record.stack_info:
            message += "\n" + self.formatStack(record.stack_info)

        trace = getattr(record, "trace", "") or ""
        span_id = getattr(record, "span_id", "") or ""
        if not trace and self.project_id:
            trace, span_id = trace_from_context(self.project_id)

        line = LogLine(
            severity=from_logging_level(record.levelno),
            message=message,
            trace=trace,
            span_id=span_id,
            timestamp=TimeString(self._cache().format(_instant_from_created(record.created))),
        )
        return encode_line(line)[:-1].decode("utf-8")


def with_trace(
    logger: logging.Logger, tracer: Tracer, headers: Mapping[str, str]
) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Returns a logger that tags records with the request's trace, if it has one."""
    trace = tracer.from_headers(headers)
    if not trace:
        return logger
    return logging.LoggerAdapter(logger, {"trace": trace})


class _GlobalLogger(Protocol):
    def debug(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: ...
    def info(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: ...
    def warn(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: ...
    def error(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: ...
    def critical(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: ...

class _NopLogger:
    def debug(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: pass
    def info(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: pass
    def warn(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: pass
    def error(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: pass
    def critical(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None: pass

class _StreamLogger:
    """Writes LogLines straight to a text stream.

    Only the LogLine fields trace, span_id and example_key are accepted as
    keywords; other keywords are a TypeError at the call site.
    """

    def __init__(self, stream: Optional[Any] = None, min_severity: Severity = Severity.DEBUG) -> None:
        self._stream = stream
        self.min_severity = min_severity
        self._cache = MinuteCache()
        self._lock = threading.Lock()

    def _emit(self, severity: Severity, msg: str, trace: str, span_id: str, example_key: Optional[int]) -> None:
        if severity < self.min_severity:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            rec = LogLine(
                severity=severity,
                message=msg,
                trace=trace,
                span_id=span_id,
                timestamp=TimeString(self._cache.format(Instant.now())),
                example_key=example_key,
            )
            stream.write(encode_line(rec).decode("utf-8"))
            stream.flush()

    def debug(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None:
        self._emit(Severity.DEBUG, msg, trace, span_id, example_key)

    def info(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None:
        self._emit(Severity.INFO, msg, trace, span_id, example_key)

    def warn(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None:
        self._emit(Severity.WARNING, msg, trace, span_id, example_key)

    def error(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None:
        self._emit(Severity.ERROR, msg, trace, span_id, example_key)

    def critical(self, msg: str, *, trace: str = "", span_id: str = "", example_key: Optional[int] = None) -> None:
        self._emit(Severity.CRITICAL, msg, trace, span_id, example_key)

_global_logger: _GlobalLogger = _StreamLogger()

def get_logger() -> _GlobalLogger:
    return _global_logger

def set_logger(logger: _GlobalLogger) -> None:
    global _global_logger
    _global_logger = logger
