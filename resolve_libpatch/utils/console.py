"""Console output — ``::`` prefixed status lines for the user."""

from __future__ import annotations

import logging
from typing import IO

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

ACTION_STYLE = "bold yellow"
SUCCESS_STYLE = "bold green"
ERROR_STYLE = "bold red"
PREFIX = "::"


def make_console(color: bool | None = None, stderr: bool = False, file: IO[str] | None = None) -> Console:
    """Build a rich console.

    ``color=None`` lets rich decide from the stream; ``False`` forces plain text.
    """
    if color is None:
        return Console(file=file, stderr=stderr, highlight=False, soft_wrap=True)
    return Console(
        file=file,
        stderr=stderr,
        no_color=not color,
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
        soft_wrap=True,
    )


class Reporter:
    """Prints action, success and error lines.

    Messages are printed verbatim: paths containing ``[`` are never read as
    rich markup.
    """

    def __init__(self, color: bool | None = None, out: Console | None = None, err: Console | None = None):
        self.out = out or make_console(color)
        self.err = err or make_console(color, stderr=True)

    def action(self, message: str) -> None:
        self.out.print(self._line(ACTION_STYLE, message))

    def success(self, message: str) -> None:
        self.out.print(self._line(SUCCESS_STYLE, message))

    def error(self, message: str) -> None:
        self.err.print(self._line(ERROR_STYLE, message))

    def detail(self, message: str) -> None:
        """Print an indented, unprefixed line."""
        self.out.print(Text(f"   {message}"))

    @staticmethod
    def _line(style: str, message: str) -> Text:
        return Text.assemble((PREFIX, style), " ", message)


def setup_logging(verbose: bool = False, color: bool | None = None) -> logging.Logger:
    """Send the package's log records to stderr through rich.

    DEBUG with ``verbose``, WARNING otherwise. Safe to call more than once.
    """
    logger = logging.getLogger("resolve_libpatch")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=make_console(color, stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
