"""File scanner — find the conflicting libraries in a directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable

from resolve_libpatch.errors import FileOperationError

logger = logging.getLogger(__name__)

# Returns the entry names of a single directory level
DirectoryLister = Callable[[Path], Iterable[str]]


def list_directory(directory: Path) -> list[str]:
    """Return the names of the entries directly inside ``directory``."""
    with os.scandir(directory) as entries:
        return [entry.name for entry in entries]


def is_library(name: str, prefixes: Iterable[str]) -> bool:
    """Check if an entry name starts with one of the library prefixes.

    Matching is case-sensitive: ``LibGlib.so`` is not a library.
    """
    return any(name.startswith(prefix) for prefix in prefixes)


def match_libraries(names: Iterable[str], prefixes: Iterable[str]) -> list[str]:
    """Filter ``names`` down to library entries, sorted for stable output."""
    prefixes = tuple(prefixes)
    return sorted(name for name in names if is_library(name, prefixes))


def scan_libraries(
    directory: Path,
    prefixes: Iterable[str],
    lister: DirectoryLister = list_directory,
) -> list[Path]:
    """Return the library paths directly inside ``directory``.

    A missing directory yields an empty list: an empty match is a normal
    outcome, and callers decide whether it is an error.

    Raises:
        FileOperationError: If the directory exists but cannot be listed.
    """
    directory = Path(directory)
    try:
        entries = list(lister(directory))
    except (FileNotFoundError, NotADirectoryError):
        logger.debug("Not scanning %s: no such directory", directory)
        return []
    except OSError as e:
        raise FileOperationError(f"Failed to list '{directory}'.", e.strerror or str(e))

    names = match_libraries(entries, prefixes)
    logger.debug("Found %d libraries in %s", len(names), directory)
    return [directory / name for name in names]
