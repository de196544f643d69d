from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args


Phase = Literal["pre", "rc", "rtm"]
Pending = Literal["none", "prerelease", "stable"]
BumpKind = Literal["none", "auto", "patch", "minor", "major"]

PHASES: tuple[Phase, ...] = get_args(Phase)
PENDING_VALUES: tuple[Pending, ...] = get_args(Pending)
BUMP_KINDS: tuple[BumpKind, ...] = get_args(BumpKind)

# pre < rc < rtm
PHASE_ORDER: dict[str, int] = {phase: i for i, phase in enumerate(PHASES)}


@dataclass(frozen=True, slots=True)
class VersionState:
    """Persisted release lifecycle state.

    `phase_number` is 0 exactly when `phase` is "rtm". `dev_number` counts dev
    builds since the last shipment in the current iteration.
    """

    base: str
    phase: str
    phase_number: int
    dev_number: int
    pending: str = "none"

    def to_json(self) -> dict[str, object]:
        return {
            "base": self.base,
            "phase": self.phase,
            "phaseNumber": self.phase_number,
            "devNumber": self.dev_number,
            "pending": self.pending,
        }


@dataclass(frozen=True, slots=True)
class CalculatedVersions:
    dev_version: str
    rc_version: str
    next_state: str  # encoded, see codec.encode

    def to_json(self) -> dict[str, object]:
        return {
            "devVersion": self.dev_version,
            "rcVersion": self.rc_version,
            "nextState": self.next_state,
        }


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    """A release as reported by the hosting service."""

    tag_name: str
    is_draft: bool
    is_prerelease: bool


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    reason: str | None = None

    def to_json(self) -> dict[str, object]:
        return {"valid": self.valid, "reason": self.reason}


@dataclass(frozen=True, slots=True)
class BumpResult:
    valid: bool
    reason: str | None = None
    new_state: VersionState | None = None

    def to_json(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "reason": self.reason,
            "newState": None if self.new_state is None else self.new_state.to_json(),
        }
