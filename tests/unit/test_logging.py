"""Unit tests for logging setup."""

import json
import logging

import pytest
import structlog

from widgetadmin.infrastructure.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo global logging configuration after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_json_output_renders_structlog_and_stdlib_records(capsys) -> None:
    setup_logging("DEBUG", json_output=True)
    structlog.get_logger("widgetadmin.test").info("role_created", name="Support")
    logging.getLogger("psycopg").warning("plain record")

    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
    events = {line["event"]: line for line in lines}
    assert events["role_created"]["name"] == "Support"
    assert events["role_created"]["level"] == "info"
    assert events["plain record"]["level"] == "warning"


def test_level_is_applied_to_root_logger() -> None:
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
