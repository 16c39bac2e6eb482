"""Tests for the logging integration."""
import io
import logging

import pytest
from rich.console import Console

from pathassert import log


def _console():
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, width=200), buf


def _record(level, msg):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestRichLogHandler:
    """Test RichLogHandler class."""

    def test_emit_prints_message(self):
        console, buf = _console()
        handler = log.RichLogHandler(console)
        handler.setFormatter(logging.Formatter("%(message)s"))

        handler.emit(_record(logging.INFO, "Test info"))

        assert "Test info" in buf.getvalue()

    def test_markup_is_escaped(self):
        console, buf = _console()
        handler = log.RichLogHandler(console)
        handler.setFormatter(logging.Formatter("%(message)s"))

        handler.emit(_record(logging.WARNING, "[bold]not markup[/bold]"))

        assert "[bold]not markup[/bold]" in buf.getvalue()

    @pytest.mark.parametrize(
        "level, style",
        [
            (logging.DEBUG, "dim"),
            (logging.INFO, "blue"),
            (logging.WARNING, "yellow"),
            (logging.ERROR, "bold red"),
            (logging.CRITICAL, "bold red"),
        ],
    )
    def test_style_for(self, level, style):
        assert log.style_for(level) == style


class TestSetup:
    """Test setup and teardown functions."""

    def test_setup_adds_handler(self):
        handler = log.setup()
        assert handler in logging.getLogger().handlers

    def test_setup_twice_returns_same_handler(self):
        assert log.setup() is log.setup()

    def test_teardown_removes_handler(self):
        handler = log.setup()
        log.teardown()
        assert handler not in logging.getLogger().handlers

    def test_teardown_without_setup(self):
        log.teardown()


class TestLogAssertionError:
    def test_logs_description_and_message(self, caplog):
        with caplog.at_level(logging.INFO, logger="pathassert.log"):
            log.log_assertion_error("path exists", AssertionError("\nExpecting path:\n  x\nto exist"))
        assert "path exists assertion failure:" in caplog.text
        assert "to exist" in caplog.text

    def test_goes_through_rich_console(self):
        console, buf = _console()
        log.setup(console=console)
        log.log_assertion_error("path hasContent", AssertionError("boom"))
        assert "path hasContent assertion failure:boom" in buf.getvalue()
