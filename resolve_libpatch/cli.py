"""resolve-libpatch CLI — apply, revert or inspect the DaVinci Resolve library patch."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from pathlib import Path
from typing import NoReturn

import click

from resolve_libpatch import __version__
from resolve_libpatch.config import DEFAULT_LIBS_DIR, PatchConfig
from resolve_libpatch.errors import PatchError, PreconditionError
from resolve_libpatch.patch.models import PatchStatus
from resolve_libpatch.patch.toggler import PatchToggler
from resolve_libpatch.utils.console import Reporter, setup_logging
from resolve_libpatch.utils.file_ops import LocalFileOps, SudoFileOps
from resolve_libpatch.utils.privilege import acquire_privilege

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    # Unknown options land in the UNKNOWN argument and are reported with exit 1
    "ignore_unknown_options": True,
}


def _usage_error(ctx: click.Context, reporter: Reporter, message: str) -> NoReturn:
    reporter.error(message)
    click.echo("", err=True)
    click.echo(ctx.get_help(), err=True)
    ctx.exit(1)


class PatchCommand(click.Command):
    """Reports every command-line mistake with exit status 1 instead of click's 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            # Options are not parsed yet, so --no-color cannot apply here
            _usage_error(ctx, Reporter(), e.format_message())


def _print_status(reporter: Reporter, status: PatchStatus) -> bool:
    if status.is_consistent:
        reporter.success(status.summary())
    else:
        reporter.error(status.summary())
    for label, paths in (("active", status.active), ("disabled", status.disabled)):
        for path in paths:
            reporter.detail(f"{label:<8} {path}")
    return status.is_consistent


@click.command(cls=PatchCommand, context_settings=CONTEXT_SETTINGS)
@click.option("--revert", is_flag=True, help="Restores the original libraries and removes the patch.")
@click.option("--status", "show_status", is_flag=True, help="Show whether the patch is applied and exit.")
@click.option(
    "--libs-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_LIBS_DIR,
    show_default=True,
    help="DaVinci Resolve libraries directory.",
)
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("-v", "--verbose", is_flag=True, help="Log every scan, move and sudo call.")
@click.version_option(version=__version__)
@click.argument("unknown", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(
    ctx: click.Context,
    revert: bool,
    show_status: bool,
    libs_dir: Path,
    no_color: bool,
    verbose: bool,
    unknown: tuple[str, ...],
):
    """A script to patch DaVinci Resolve library conflicts on Linux.

    Running the script without options will apply the patch.
    """
    config = PatchConfig.for_libs_dir(libs_dir, color=False if no_color else None)
    setup_logging(verbose, config.color)
    reporter = Reporter(color=config.color)

    if unknown:
        _usage_error(ctx, reporter, f"Unknown option: {unknown[0]}")
    if revert and show_status:
        _usage_error(ctx, reporter, "Options --revert and --status cannot be combined.")

    try:
        if show_status:
            toggler = PatchToggler(config, reporter=reporter)
            if not config.libs_dir.is_dir():
                raise PreconditionError(f"DaVinci Resolve libraries directory not found at '{config.libs_dir}'.")
            ctx.exit(0 if _print_status(reporter, toggler.status()) else 1)

        keepalive = acquire_privilege(config.keepalive_interval, notify=reporter.action)
        file_ops = LocalFileOps() if keepalive is None else SudoFileOps()
        toggler = PatchToggler(config, file_ops=file_ops, reporter=reporter)

        with keepalive or nullcontext():
            if revert:
                result = toggler.revert()
            else:
                result = toggler.apply()
        logger.debug("%s: moved %d files", result.action.value, result.count)
    except PatchError as e:
        reporter.error(str(e))
        ctx.exit(1)


if __name__ == "__main__":
    main()
