from __future__ import annotations

import io
import json
import logging
import re

import pytest

from batch_publish.utils.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extras() -> None:
    record = logging.makeLogRecord(
        {
            "name": "batch_publish.app.report",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "Success for %s: %s",
            "args": ("Dot", "ok"),
            "event": "publish.success",
            "entry": "Dot",
        }
    )

    data = json.loads(JsonFormatter().format(record))

    assert data["message"] == "Success for Dot: ok"
    assert data["level"] == "INFO"
    assert data["event"] == "publish.success"
    assert data["entry"] == "Dot"
    assert "msg" not in data


def test_configure_logging_installs_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    stream = io.StringIO()

    configure_logging(level=logging.DEBUG, structured=False, stream=stream)
    logging.getLogger("batch_publish.test").debug("hello %s", "there")

    assert root.level == logging.DEBUG
    assert "DEBUG batch_publish.test: hello there" in stream.getvalue()


def test_configure_logging_defaults_to_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_logging(level="info", structured=True)
    logging.getLogger("batch_publish.test").info("to stderr", extra={"entry": "Dot"})

    captured = capsys.readouterr()
    assert captured.out == ""
    data = json.loads(captured.err.strip())
    assert data["entry"] == "Dot"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", data["timestamp"])


def test_unknown_level_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        configure_logging(level="chatty")
