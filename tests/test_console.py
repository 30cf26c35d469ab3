"""Tests for status line rendering and logging setup."""

import io
import logging

from rich.logging import RichHandler

from resolve_libpatch.utils.console import Reporter, make_console, setup_logging


def _reporter(color=False):
    out, err = io.StringIO(), io.StringIO()
    reporter = Reporter(out=make_console(color, file=out), err=make_console(color, file=err))
    return reporter, out, err


def test_plain_lines():
    reporter, out, err = _reporter()
    reporter.action("Moving 4 conflicting libraries...")
    reporter.success("Patch applied successfully!")
    reporter.error("Failed to move libraries.")

    assert out.getvalue() == ":: Moving 4 conflicting libraries...\n:: Patch applied successfully!\n"
    assert err.getvalue() == ":: Failed to move libraries.\n"


def test_plain_output_has_no_escape_codes():
    reporter, out, _ = _reporter()
    reporter.action("Applying DaVinci Resolve library patch...")
    assert "\x1b[" not in out.getvalue()


def test_colored_output():
    reporter, out, err = _reporter(color=True)
    reporter.action("working")
    reporter.error("broken")
    assert "\x1b[" in out.getvalue()
    assert "\x1b[" in err.getvalue()
    assert "working" in out.getvalue()


def test_brackets_are_not_markup():
    reporter, out, _ = _reporter()
    reporter.action("Moving '/opt/resolve/libs/[bold]odd'")
    assert "[bold]odd" in out.getvalue()


def test_detail_is_indented():
    reporter, out, _ = _reporter()
    reporter.detail("active   /opt/resolve/libs/libglib-2.0.so.0")
    assert out.getvalue().startswith("   active")


def test_setup_logging_levels_and_single_handler():
    logger = setup_logging(verbose=False, color=False)
    assert logger.level == logging.WARNING

    logger = setup_logging(verbose=True, color=False)
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
