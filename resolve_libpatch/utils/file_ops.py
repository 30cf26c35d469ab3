"""File operations — the create/move/remove calls a patch run performs.

Two back-ends share one interface:

- ``LocalFileOps`` issues the system calls directly. Used when the process
  already runs as root, and by the tests against temporary directories.
- ``SudoFileOps`` runs ``sudo mkdir``/``sudo mv``/``sudo rmdir`` so an
  unprivileged process can modify a root-owned install, relying on the sudo
  timestamp cached by ``utils.privilege``.

Each move handles exactly one file, so a failure leaves every earlier move
completed and every later one untouched.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable

from resolve_libpatch.errors import FileOperationError

logger = logging.getLogger(__name__)


class FileOps:
    """Interface for the three mutations a patch run needs."""

    def make_dir(self, path: Path) -> None:
        """Create ``path`` and any missing parents; an existing dir is fine."""
        raise NotImplementedError

    def move(self, source: Path, target_dir: Path) -> Path:
        """Move ``source`` into ``target_dir`` and return its new path."""
        raise NotImplementedError

    def remove_dir(self, path: Path) -> None:
        """Remove the empty directory ``path``."""
        raise NotImplementedError


class LocalFileOps(FileOps):
    """Direct system calls, for a process that can already write the target."""

    def make_dir(self, path: Path) -> None:
        logger.debug("mkdir -p %s", path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create directory '{path}'.", e.strerror or str(e))

    def move(self, source: Path, target_dir: Path) -> Path:
        target = target_dir / source.name
        logger.debug("mv %s %s", source, target)
        try:
            # rename(2) is atomic per file and refuses to copy across devices
            source.rename(target)
        except OSError as e:
            raise FileOperationError(f"Failed to move '{source}' to '{target_dir}'.", e.strerror or str(e))
        return target

    def remove_dir(self, path: Path) -> None:
        logger.debug("rmdir %s", path)
        try:
            path.rmdir()
        except OSError as e:
            raise FileOperationError(
                f"Failed to remove directory '{path}'. It may not be empty.", e.strerror or str(e)
            )


class SudoFileOps(FileOps):
    """Runs each operation through ``sudo`` without prompting.

    The sudo timestamp must already be valid (see ``acquire_privilege``);
    ``-n`` makes sudo fail instead of blocking on a password prompt.
    """

    def __init__(self, runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.runner = runner

    def make_dir(self, path: Path) -> None:
        self._sudo(["mkdir", "-p", "--", str(path)], f"Failed to create directory '{path}'.")

    def move(self, source: Path, target_dir: Path) -> Path:
        self._sudo(
            ["mv", "--", str(source), f"{target_dir}/"],
            f"Failed to move '{source}' to '{target_dir}'.",
        )
        return target_dir / source.name

    def remove_dir(self, path: Path) -> None:
        self._sudo(["rmdir", "--", str(path)], f"Failed to remove directory '{path}'. It may not be empty.")

    def _sudo(self, command: list[str], failure: str) -> None:
        argv = ["sudo", "-n", *command]
        logger.debug("Running %s", " ".join(argv))
        try:
            proc = self.runner(argv, capture_output=True, text=True)
        except OSError as e:
            raise FileOperationError(failure, e.strerror or str(e))
        if proc.returncode != 0:
            raise FileOperationError(failure, (proc.stderr or "").strip() or f"exit status {proc.returncode}")
