"""Exceptions raised by the patch toggler.

Every failure is terminal for the run: components raise, and only the CLI
catches ``PatchError`` to print a single message and exit non-zero.
"""

from __future__ import annotations


class PatchError(Exception):
    """Base class for all patch failures.

    Attributes:
        message: Human-readable summary shown to the user.
        details: Underlying OS or subprocess message, if any.
    """

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class PreconditionError(PatchError):
    """An expected directory is absent."""


class NoLibrariesError(PatchError):
    """No matching library was found where at least one is required."""


class InconsistentStateError(PatchError):
    """Both the libs dir and the holding area contain matching libraries."""


class PrivilegeError(PatchError):
    """Elevated privileges could not be obtained."""


class FileOperationError(PatchError):
    """A create, move or remove call failed."""
