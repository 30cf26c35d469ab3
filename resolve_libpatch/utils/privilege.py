"""Privilege handling — root check, sudo prompt and timestamp keep-alive."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
from typing import Callable

from resolve_libpatch.config import KEEPALIVE_INTERVAL
from resolve_libpatch.errors import PrivilegeError

logger = logging.getLogger(__name__)


def is_root() -> bool:
    """Return True when the effective user id is 0."""
    return os.geteuid() == 0


class SudoKeepAlive:
    """Background refresh of the sudo timestamp for the length of a run.

    Runs ``sudo -n true`` every ``interval`` seconds on a daemon thread until
    ``stop()`` is called. Use as a context manager::

        with SudoKeepAlive():
            toggler.apply()
        # refresh stopped here

    The thread never touches the filesystem, and being a daemon it also ends
    with the process if ``stop()`` is never reached.
    """

    def __init__(
        self,
        interval: float = KEEPALIVE_INTERVAL,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.interval = interval
        self.runner = runner
        self._cancelled = threading.Event()
        self._thread: threading.Thread | None = None

    def __enter__(self) -> "SudoKeepAlive":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._cancelled.clear()
        self._thread = threading.Thread(target=self._run, name="sudo-keepalive", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the refresh loop to exit and wait for it."""
        self._cancelled.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        # wait() returns True as soon as the run is cancelled
        while not self._cancelled.wait(self.interval):
            try:
                proc = self.runner(["sudo", "-n", "true"], capture_output=True)
            except OSError as e:
                logger.debug("sudo refresh failed: %s", e)
                continue
            logger.debug("Refreshed sudo timestamp (exit %s)", proc.returncode)


def acquire_privilege(
    interval: float = KEEPALIVE_INTERVAL,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    root_check: Callable[[], bool] = is_root,
    which: Callable[[str], str | None] = shutil.which,
    notify: Callable[[str], None] | None = None,
) -> SudoKeepAlive | None:
    """Make sure the rest of the run can modify root-owned files.

    Returns ``None`` when the process already runs as root. Otherwise prompts
    once for the sudo password and returns an unstarted ``SudoKeepAlive``
    for the caller to enter.

    Raises:
        PrivilegeError: If sudo is not installed or the prompt fails.
    """
    if root_check():
        logger.debug("Running as root; no escalation needed")
        return None

    if notify is not None:
        notify("This script requires sudo privileges to modify system files.")

    if which("sudo") is None:
        raise PrivilegeError("sudo command not found. Please run this script as root.")

    logger.debug("Requesting sudo timestamp")
    try:
        # Inherits the terminal so sudo can prompt for the password
        proc = runner(["sudo", "-v"])
    except OSError as e:
        raise PrivilegeError("Failed to run sudo.", e.strerror or str(e))
    if proc.returncode != 0:
        raise PrivilegeError("Could not obtain sudo privileges.", f"sudo exited with status {proc.returncode}")

    return SudoKeepAlive(interval=interval, runner=runner)
