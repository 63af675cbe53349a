"""Tests for log configuration."""

from __future__ import annotations

import io
import json
import logging

from ecobot.logging_pipeline import JsonFormatter, configure_logging


def test_json_formatter_includes_context() -> None:
    record = logging.LogRecord(
        "ecobot.sequencer", logging.INFO, __file__, 1, "Footprint %s", ("calculated",), None
    )
    record.total_tons = 4.2
    payload = json.loads(JsonFormatter(session_id="abc").format(record))

    assert payload["message"] == "Footprint calculated"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "ecobot.sequencer"
    assert payload["session_id"] == "abc"
    assert payload["context"] == {"total_tons": 4.2}


def test_configure_logging_plain_text() -> None:
    stream = io.StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    logging.getLogger("ecobot.test").info("hello %s", "world")
    assert "INFO ecobot.test - hello world" in stream.getvalue()


def test_configure_logging_replaces_previous_handler() -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(level=logging.INFO, stream=first)
    configure_logging(level=logging.INFO, stream=second, json_output=True)

    logging.getLogger("ecobot.test").warning("only once")

    assert first.getvalue() == ""
    line = second.getvalue().strip()
    assert json.loads(line)["message"] == "only once"
    assert len(logging.getLogger("ecobot").handlers) == 1


def test_configure_logging_respects_level() -> None:
    stream = io.StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    logging.getLogger("ecobot.test").info("hidden")
    assert stream.getvalue() == ""
