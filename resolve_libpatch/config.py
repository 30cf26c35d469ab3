"""Patch configuration — the directories and prefixes a run operates on."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_LIBS_DIR = Path("/opt/resolve/libs")
"""Library directory of a stock DaVinci Resolve install."""

DISABLED_DIR_NAME = "_disabled"
"""Holding area for moved-aside libraries, created beneath the libs dir."""

LIBRARY_PREFIXES = ("libgio", "libglib", "libgmodule", "libgobject")
"""Bundled GLib libraries that clash with the system's native copies."""

KEEPALIVE_INTERVAL = 60.0  # seconds between sudo timestamp refreshes


@dataclass(frozen=True)
class PatchConfig:
    """Everything a patch run needs to know, passed explicitly to each component.

    ``disabled_dir`` defaults to ``libs_dir / DISABLED_DIR_NAME``. ``color``
    is ``None`` to let the console detect terminal support.
    """

    libs_dir: Path = DEFAULT_LIBS_DIR
    disabled_dir: Path | None = None
    prefixes: tuple[str, ...] = LIBRARY_PREFIXES
    color: bool | None = None
    keepalive_interval: float = KEEPALIVE_INTERVAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "libs_dir", Path(self.libs_dir))
        if self.disabled_dir is None:
            object.__setattr__(self, "disabled_dir", self.libs_dir / DISABLED_DIR_NAME)
        else:
            object.__setattr__(self, "disabled_dir", Path(self.disabled_dir))
        if not self.prefixes:
            raise ValueError("At least one library prefix is required")

    @classmethod
    def for_libs_dir(cls, libs_dir: str | Path, color: bool | None = None) -> "PatchConfig":
        """Build a config rooted at ``libs_dir`` with the default holding area."""
        return cls(libs_dir=Path(libs_dir), color=color)
