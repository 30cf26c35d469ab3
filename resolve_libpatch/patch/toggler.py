"""Patch toggler — apply, revert and inspect the library patch.

Applying moves every library whose name starts with one of the configured
prefixes from the libs dir into the holding area; reverting moves them back
and removes the holding area. State is never stored: every call rescans both
directories.

Moves happen one file at a time. The first failure aborts the run without
rolling back earlier moves; the next run then sees libraries in both
directories and refuses to continue until someone resolves it by hand.
"""

from __future__ import annotations

import logging
from pathlib import Path

from resolve_libpatch.config import PatchConfig
from resolve_libpatch.errors import (
    InconsistentStateError,
    NoLibrariesError,
    PreconditionError,
)
from resolve_libpatch.patch.models import PatchAction, PatchResult, PatchStatus
from resolve_libpatch.utils.console import Reporter
from resolve_libpatch.utils.file_ops import FileOps, LocalFileOps
from resolve_libpatch.utils.file_scanner import DirectoryLister, list_directory, scan_libraries

logger = logging.getLogger(__name__)


class PatchToggler:
    """Moves the conflicting libraries between the libs dir and the holding area."""

    def __init__(
        self,
        config: PatchConfig,
        file_ops: FileOps | None = None,
        reporter: Reporter | None = None,
        lister: DirectoryLister = list_directory,
    ):
        self.config = config
        self.file_ops = file_ops or LocalFileOps()
        self.reporter = reporter or Reporter(color=config.color)
        self.lister = lister

    @property
    def libs_dir(self) -> Path:
        return self.config.libs_dir

    @property
    def disabled_dir(self) -> Path:
        return self.config.disabled_dir

    def status(self) -> PatchStatus:
        """Scan both directories and return the current patch state."""
        status = PatchStatus(
            libs_dir=self.libs_dir,
            disabled_dir=self.disabled_dir,
            active=scan_libraries(self.libs_dir, self.config.prefixes, self.lister),
            disabled=scan_libraries(self.disabled_dir, self.config.prefixes, self.lister),
        )
        logger.debug("Patch state: %s", status.state.value)
        return status

    def apply(self) -> PatchResult:
        """Move the conflicting libraries into the holding area.

        Returns a result with ``ALREADY_APPLIED`` and no moves when only the
        holding area has libraries.

        Raises:
            PreconditionError: If the libs dir does not exist.
            NoLibrariesError: If neither directory has libraries.
            InconsistentStateError: If both directories have libraries.
            FileOperationError: If a directory cannot be listed, or creating
                the holding area or a move fails.
        """
        self.reporter.action("Applying DaVinci Resolve library patch...")

        if not self.libs_dir.is_dir():
            raise PreconditionError(f"DaVinci Resolve libraries directory not found at '{self.libs_dir}'.")

        status = self.status()

        if not status.active:
            if status.disabled:
                self.reporter.success("Patch seems to be already applied. No action needed.")
                return PatchResult(action=PatchAction.ALREADY_APPLIED)
            raise NoLibrariesError(f"No conflicting libraries found to move in '{self.libs_dir}'.")

        if status.disabled:
            raise InconsistentStateError(
                f"Libraries found in both '{self.libs_dir}' and '{self.disabled_dir}'. "
                "A previous run was interrupted; move the files by hand before retrying."
            )

        self.reporter.action(f"Creating backup directory at '{self.disabled_dir}'.")
        self.file_ops.make_dir(self.disabled_dir)

        self.reporter.action(f"Moving {len(status.active)} conflicting libraries...")
        moved = [self.file_ops.move(path, self.disabled_dir) for path in status.active]

        self.reporter.success("Patch applied successfully!")
        self.reporter.action("DaVinci Resolve should now use the system's native libraries.")
        return PatchResult(action=PatchAction.APPLIED, moved=moved)

    def revert(self) -> PatchResult:
        """Move the libraries back and remove the holding area.

        Raises:
            PreconditionError: If the holding area does not exist.
            NoLibrariesError: If the holding area has no libraries.
            InconsistentStateError: If the libs dir also has libraries.
            FileOperationError: If a move fails, or the holding area is not
                empty afterwards. Completed moves are kept.
        """
        self.reporter.action("Reverting DaVinci Resolve library patch...")

        if not self.disabled_dir.is_dir():
            raise PreconditionError(f"No patch to revert. Directory '{self.disabled_dir}' not found.")

        status = self.status()

        if not status.disabled:
            raise NoLibrariesError(f"No libraries found in '{self.disabled_dir}' to restore.")

        if status.active:
            raise InconsistentStateError(
                f"Libraries found in both '{self.libs_dir}' and '{self.disabled_dir}'. "
                "Restoring would overwrite them; move the files by hand before retrying."
            )

        self.reporter.action(f"Restoring {len(status.disabled)} libraries to '{self.libs_dir}'...")
        moved = [self.file_ops.move(path, self.libs_dir) for path in status.disabled]

        self.reporter.action(f"Removing backup directory '{self.disabled_dir}'...")
        self.file_ops.remove_dir(self.disabled_dir)

        self.reporter.success("Patch reverted successfully!")
        return PatchResult(action=PatchAction.REVERTED, moved=moved)
