"""Patch data models — filesystem-derived state and run results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class PatchState(Enum):
    APPLIED = "applied"  # libraries only in the holding area
    NOT_APPLIED = "not_applied"  # libraries only in the libs dir
    INCONSISTENT = "inconsistent"  # libraries in both, e.g. an interrupted move
    MISSING = "missing"  # libraries in neither


@dataclass
class PatchStatus:
    """Patch state recomputed from directory contents."""

    libs_dir: Path
    disabled_dir: Path
    active: list[Path] = field(default_factory=list)
    """Matching libraries found in the libs dir."""

    disabled: list[Path] = field(default_factory=list)
    """Matching libraries found in the holding area."""

    @property
    def state(self) -> PatchState:
        if self.active and self.disabled:
            return PatchState.INCONSISTENT
        if self.disabled:
            return PatchState.APPLIED
        if self.active:
            return PatchState.NOT_APPLIED
        return PatchState.MISSING

    @property
    def is_consistent(self) -> bool:
        return self.state in (PatchState.APPLIED, PatchState.NOT_APPLIED)

    def summary(self) -> str:
        state = self.state
        if state == PatchState.APPLIED:
            return f"Patch is applied: {len(self.disabled)} libraries in '{self.disabled_dir}'."
        if state == PatchState.NOT_APPLIED:
            return f"Patch is not applied: {len(self.active)} libraries in '{self.libs_dir}'."
        if state == PatchState.INCONSISTENT:
            return (
                f"Inconsistent state: {len(self.active)} libraries in '{self.libs_dir}' "
                f"and {len(self.disabled)} in '{self.disabled_dir}'."
            )
        return f"No conflicting libraries found in '{self.libs_dir}' or '{self.disabled_dir}'."


class PatchAction(Enum):
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    REVERTED = "reverted"


@dataclass
class PatchResult:
    """Outcome of a successful apply or revert."""

    action: PatchAction
    moved: list[Path] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.moved)
