# LogSeverity values recognized by Cloud Logging.
# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#LogSeverity

from __future__ import annotations
import enum
import logging

class SeverityError(ValueError):
    """A level with no entry in the severity table (a programming error)."""

class Severity(enum.IntEnum):
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4
    ALERT = 5
    EMERGENCY = 6

MIN_LEVEL = Severity.DEBUG
MAX_LEVEL = Severity.EMERGENCY

# Indexed by level - MIN_LEVEL. New levels must be added here explicitly.
_SEVERITY_NAMES = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "ALERT",
    "EMERGENCY",
)

# stdlib logging has no ALERT or EMERGENCY; register_levels() adds them.
ALERT = 60
EMERGENCY = 70

_LOGGING_LEVELS = {
    logging.DEBUG: Severity.DEBUG,
    logging.INFO: Severity.INFO,
    logging.WARNING: Severity.WARNING,
    logging.ERROR: Severity.ERROR,
    logging.CRITICAL: Severity.CRITICAL,
    ALERT: Severity.ALERT,
    EMERGENCY: Severity.EMERGENCY,
}

def severity_name(level: int) -> str:
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise SeverityError(f"no severity for level {level!r}")
    return _SEVERITY_NAMES[level - MIN_LEVEL]

def from_logging_level(levelno: int) -> Severity:
    try:
        return _LOGGING_LEVELS[levelno]
    except KeyError:
        raise SeverityError(f"no severity for logging level {levelno!r}") from None

def register_levels() -> None:
    logging.addLevelName(ALERT, "ALERT")
    logging.addLevelName(EMERGENCY, "EMERGENCY")
