"""
Logging integration for pathassert.

Routes standard logging records to a rich console with colored output, and
offers a helper to log an assertion failure that a caller expected and caught.

Example:
    >>> from pathassert import assert_that, log
    >>> log.setup()
    >>> try:
    ...     assert_that("missing.txt").exists()
    ... except AssertionError as e:
    ...     log.log_assertion_error("path exists", e)
"""
import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

_LEVEL_STYLES = (
    (logging.ERROR, "bold red"),
    (logging.WARNING, "yellow"),
    (logging.INFO, "blue"),
)


class RichLogHandler(logging.Handler):
    """Logging handler that prints records to a rich console with colors."""

    def __init__(self, console: Optional[Console] = None, level: int = logging.NOTSET):
        super().__init__(level)
        self.console = console or Console(stderr=True)

    def emit(self, record: logging.LogRecord):
        try:
            msg = escape(self.format(record))
            self.console.print(f"[{style_for(record.levelno)}]{msg}[/]")
        except Exception:  # pylint: disable=broad-except
            self.handleError(record)


def style_for(levelno: int) -> str:
    """Return the rich style used for a log level."""
    for threshold, style in _LEVEL_STYLES:
        if levelno >= threshold:
            return style
    return "dim"


_handler: Optional[RichLogHandler] = None


def setup(level: int = logging.INFO, console: Optional[Console] = None) -> RichLogHandler:
    """Install the rich handler on the root logger.

    Calling it again while installed returns the existing handler.

    Args:
        level: Minimum logging level (default INFO)
        console: Console to print to (default: a new stderr console)
    """
    global _handler

    if _handler is not None:
        return _handler

    _handler = RichLogHandler(console)
    _handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.addHandler(_handler)
    root.setLevel(level)
    return _handler


def teardown():
    """Remove the rich handler from the root logger."""
    global _handler

    if _handler is not None:
        logging.getLogger().removeHandler(_handler)
        _handler = None


def log_assertion_error(description: str, error: AssertionError) -> None:
    """Log an assertion failure that the caller expected and caught."""
    logger.info("%s assertion failure:%s", description, error)
