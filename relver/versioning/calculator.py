from __future__ import annotations

from relver.versioning.codec import encode_fields
from relver.versioning.errors import UnknownPhaseError
from relver.versioning.model import CalculatedVersions, VersionState


def shippable_version(base: str, phase: str, phase_number: int) -> str:
    """Version published when the current iteration ships.

    Raises:
        UnknownPhaseError: If `phase` is not pre/rc/rtm.
    """
    match phase:
        case "pre" | "rc":
            return f"{base}-{phase}.{phase_number}.rel"
        case "rtm":
            return base
        case _:
            raise UnknownPhaseError(phase)


def dev_version(base: str, phase: str, phase_number: int, dev_number: int) -> str:
    match phase:
        case "pre" | "rc":
            return f"{base}-{phase}.{phase_number}.dev.{dev_number}"
        case "rtm":
            return f"{base}-rtm.dev.{dev_number}"
        case _:
            raise UnknownPhaseError(phase)


def calculate(state: VersionState) -> CalculatedVersions:
    """Versions for the next build of `state`.

    The dev number is incremented for the upcoming build; `next_state` is what
    to persist once that build's version is accepted. Calling this twice on the
    same state yields the same result.
    """
    next_dev = state.dev_number + 1
    next_state = VersionState(
        base=state.base,
        phase=state.phase,
        phase_number=state.phase_number,
        dev_number=next_dev,
        pending="none",
    )
    return CalculatedVersions(
        dev_version=dev_version(state.base, state.phase, state.phase_number, next_dev),
        rc_version=shippable_version(state.base, state.phase, state.phase_number),
        next_state=encode_fields(next_state),
    )
