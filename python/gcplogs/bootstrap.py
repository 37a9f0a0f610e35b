# Process-wide setup: root logging handler and the facade logger.
import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Optional

from . import logging as gcplogging
from .severity import from_logging_level, register_levels
from .tracing import PROJECT_ENV_VAR

LEVEL_ENV_VAR = "GCPLOGS_LEVEL"
STREAM_ENV_VAR = "GCPLOGS_STREAM"
ENABLED_ENV_VAR = "GCPLOGS_ENABLED"

_STREAMS = ("stderr", "stdout")

_handler: Optional[logging.Handler] = None
# root level before init(), restored by shutdown()
_saved_level: Optional[int] = None


def default_project_id() -> str:
    """GOOGLE_CLOUD_PROJECT, or "" when unset.

    Credential files and the gcloud CLI are not consulted.
    """
    return os.getenv(PROJECT_ENV_VAR, "").strip()


def _read_bool(var_name: str, default: bool) -> bool:
    value = os.getenv(var_name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_level(value: str) -> int:
    register_levels()
    levelno = logging.getLevelName(value.strip().upper())
    if not isinstance(levelno, int):
        raise ValueError(f"Unknown log level '{value}'.")
    # rejects levels with no severity, e.g. NOTSET
    from_logging_level(levelno)
    return levelno


@dataclass(frozen=True)
class Config:
    """Runtime settings. from_env() fills them from environment variables."""

    project_id: str = ""
    level: str = "INFO"
    stream: str = "stderr"
    enable_logs: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            project_id=default_project_id(),
            level=os.getenv(LEVEL_ENV_VAR) or "INFO",
            stream=(os.getenv(STREAM_ENV_VAR) or "stderr").strip().lower(),
            enable_logs=_read_bool(ENABLED_ENV_VAR, True),
        )

    @property
    def levelno(self) -> int:
        return _parse_level(self.level)

    def resolve_stream(self):
        if self.stream not in _STREAMS:
            raise ValueError(f"Unsupported stream '{self.stream}'. Use 'stderr' or 'stdout'.")
        return sys.stdout if self.stream == "stdout" else sys.stderr


def init(config: Optional[Config] = None, **overrides) -> Config:
    """Install Cloud Logging output on the root logger and the facade.

    Calling init() again replaces the previous handler. Returns the
    effective config.
    """
    global _handler, _saved_level
    cfg = config if config is not None else Config.from_env()
    if overrides:
        cfg = replace(cfg, **overrides)

    levelno = cfg.levelno
    stream = cfg.resolve_stream()
    shutdown()
    if not cfg.enable_logs:
        return cfg

    handler = logging.StreamHandler(stream)
    handler.setFormatter(gcplogging.CloudLoggingFormatter(project_id=cfg.project_id))
    root = logging.getLogger()
    root.addHandler(handler)
    _saved_level = root.level
    root.setLevel(levelno)
    _handler = handler

    gcplogging.set_logger(gcplogging._StreamLogger(stream, from_logging_level(levelno)))
    return cfg


def shutdown() -> None:
    """Flush and remove the handler installed by init(); the facade goes quiet.

    The handler is removed and the root level restored even if flushing fails.
    """
    global _handler, _saved_level
    try:
        if _handler is not None:
            _handler.flush()
    finally:
        root = logging.getLogger()
        if _handler is not None:
            root.removeHandler(_handler)
            _handler = None
        if _saved_level is not None:
            root.setLevel(_saved_level)
            _saved_level = None
        gcplogging.set_logger(gcplogging._NopLogger())
