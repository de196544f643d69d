"""Operator-requested base bumps and phase transitions."""

from __future__ import annotations

from typing import Sequence

from relver.core.config import DEFAULT_TAG_PREFIX
from relver.versioning.calculator import shippable_version
from relver.versioning.errors import DecodeError, UnknownPhaseError
from relver.versioning.history import validate
from relver.versioning.model import (
    BUMP_KINDS,
    PHASE_ORDER,
    PHASES,
    BumpResult,
    ReleaseInfo,
    VersionState,
)
from relver.versioning.semver import SemVer, parse_base


def _apply_bump(base: SemVer, kind: str) -> SemVer:
    match kind:
        case "none":
            return base
        case "auto":
            return base.next_auto()
        case "patch" | "minor" | "major":
            return base.bump(kind)
        case _:
            raise AssertionError(f"unexpected bump kind: {kind}")


def bump(
    state: VersionState,
    bump_kind: str,
    target_phase: str,
    history: Sequence[ReleaseInfo] | None = None,
    *,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> BumpResult:
    """Move `state` to `target_phase`, optionally bumping the base first.

    Without a bump, phases may only move forward (pre -> rc -> rtm); staying
    in the same phase is rejected as a no-op. When `history` is given, the
    first version the new state would ship must be newer than every shipped
    release.

    Raises:
        UnknownPhaseError: If the current state's phase is corrupt.
        DecodeError: If the current state's base is not X.Y.Z.
    """
    if state.phase not in PHASES:
        raise UnknownPhaseError(state.phase)
    base = parse_base(state.base)
    if base is None:
        raise DecodeError(f"Invalid base version: {state.base!r} (expected X.Y.Z)")

    kind = bump_kind.strip().lower()
    if kind not in BUMP_KINDS:
        return BumpResult(False, f"Unknown version bump type: {bump_kind}")

    if target_phase not in PHASES:
        return BumpResult(
            False, f"Unknown phase: {target_phase}. Must be 'pre', 'rc', or 'rtm'."
        )

    new_base = str(_apply_bump(base, kind))

    if new_base == state.base and kind == "none":
        if PHASE_ORDER[target_phase] < PHASE_ORDER[state.phase]:
            return BumpResult(
                False,
                f"Cannot move from phase '{state.phase}' to '{target_phase}' without bumping "
                "version. Phase transitions must move forward (pre -> rc -> rtm) or include "
                "a version bump.",
            )
        if target_phase == state.phase:
            return BumpResult(
                False,
                f"No change requested. Current phase is already '{state.phase}' and no "
                "version bump specified.",
            )

    new_phase_number = 0 if target_phase == "rtm" else 1

    if history is not None:
        proposed = shippable_version(new_base, target_phase, new_phase_number)
        validation = validate(proposed, history, tag_prefix=tag_prefix)
        if not validation.valid:
            return BumpResult(False, validation.reason)

    new_state = VersionState(
        base=new_base,
        phase=target_phase,
        phase_number=new_phase_number,
        dev_number=0,
        pending="none",
    )
    return BumpResult(True, None, new_state)
