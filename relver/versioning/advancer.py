from __future__ import annotations

from relver.versioning.errors import DecodeError, UnknownPhaseError
from relver.versioning.model import VersionState
from relver.versioning.semver import parse_base


def advance(state: VersionState, shipped_version: str) -> VersionState:
    """State to persist after `shipped_version` was published successfully.

    pre/rc move to the next iteration of the same phase. rtm shipped the stable
    base, so the base moves on and a new pre.1 iteration starts. The caller is
    responsible for checking that `shipped_version` is this state's shippable
    version.

    Raises:
        UnknownPhaseError: If the state's phase is not pre/rc/rtm.
        DecodeError: If an rtm state's base is not X.Y.Z.
    """
    del shipped_version

    match state.phase:
        case "pre" | "rc":
            return VersionState(
                base=state.base,
                phase=state.phase,
                phase_number=state.phase_number + 1,
                dev_number=0,
                pending="none",
            )
        case "rtm":
            base = parse_base(state.base)
            if base is None:
                raise DecodeError(f"Invalid base version: {state.base!r} (expected X.Y.Z)")
            return VersionState(
                base=str(base.next_auto()),
                phase="pre",
                phase_number=1,
                dev_number=0,
                pending="none",
            )
        case _:
            raise UnknownPhaseError(state.phase)
