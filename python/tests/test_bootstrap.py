from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from gcplogs import bootstrap, get_logger
from gcplogs import logging as gcplogging
from gcplogs.bootstrap import Config


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", " env-project ")
    monkeypatch.setenv("GCPLOGS_LEVEL", "debug")
    monkeypatch.setenv("GCPLOGS_STREAM", "STDOUT")
    monkeypatch.setenv("GCPLOGS_ENABLED", "no")
    cfg = Config.from_env()
    assert cfg == Config(project_id="env-project", level="debug", stream="stdout", enable_logs=False)
    assert cfg.levelno == logging.DEBUG


def test_config_defaults() -> None:
    cfg = Config.from_env()
    assert cfg == Config()
    assert bootstrap.default_project_id() == ""


def test_init_installs_root_handler(capsys) -> None:
    cfg = bootstrap.init(Config(project_id="p", level="WARNING", stream="stdout"))
    assert cfg.project_id == "p"
    logging.getLogger("app").info("filtered")
    logging.getLogger("app").warning("disk nearly full")
    get_logger().info("filtered")
    get_logger().error("facade", example_key=1)
    bootstrap.shutdown()

    out = capsys.readouterr().out.splitlines()
    parsed = [json.loads(line) for line in out]
    assert [p["severity"] for p in parsed] == ["WARNING", "ERROR"]
    assert parsed[0]["message"] == "disk nearly full"
    assert parsed[1]["example_key"] == 1


def test_init_twice_keeps_one_handler() -> None:
    bootstrap.init(Config())
    bootstrap.init(Config(), level="ERROR")
    ours = [h for h in logging.getLogger().handlers
            if isinstance(h.formatter, gcplogging.CloudLoggingFormatter)]
    assert len(ours) == 1
    assert logging.getLogger().level == logging.ERROR
    bootstrap.shutdown()
    assert not any(isinstance(h.formatter, gcplogging.CloudLoggingFormatter)
                   for h in logging.getLogger().handlers)


def test_init_disabled_uses_nop_logger() -> None:
    bootstrap.init(Config(enable_logs=False))
    assert isinstance(get_logger(), gcplogging._NopLogger)


def test_init_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GCPLOGS_LEVEL", "alert")
    cfg = bootstrap.init()
    assert logging.getLogger().level == 60
    assert cfg.level == "alert"


@pytest.mark.parametrize("overrides", [
    {"level": "LOUD"},
    {"level": "NOTSET"},
    {"stream": "file"},
])
def test_init_rejects_bad_config(overrides) -> None:
    with pytest.raises(ValueError):
        bootstrap.init(Config(), **overrides)


def test_shutdown_cleans_up_when_stream_is_closed(monkeypatch: pytest.MonkeyPatch) -> None:
    stream = io.TextIOWrapper(io.BytesIO())
    monkeypatch.setattr(sys, "stdout", stream)
    bootstrap.init(Config(stream="stdout"))
    stream.close()

    with pytest.raises(ValueError):
        bootstrap.shutdown()
    assert not any(isinstance(h.formatter, gcplogging.CloudLoggingFormatter)
                   for h in logging.getLogger().handlers)
    assert isinstance(get_logger(), gcplogging._NopLogger)

    bootstrap.shutdown()
    bootstrap.init(Config())
    bootstrap.shutdown()


def test_shutdown_restores_root_level() -> None:
    root = logging.getLogger()
    original = root.level
    root.setLevel(logging.INFO)
    try:
        bootstrap.init(Config(level="ERROR"))
        bootstrap.init(Config(level="DEBUG"))
        assert root.level == logging.DEBUG
        bootstrap.shutdown()
        assert root.level == logging.INFO
    finally:
        root.setLevel(original)
