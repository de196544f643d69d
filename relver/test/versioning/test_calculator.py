from __future__ import annotations

import pytest

from relver.versioning.calculator import calculate, dev_version, shippable_version
from relver.versioning.codec import decode, encode
from relver.versioning.errors import UnknownPhaseError
from relver.versioning.model import VersionState


def test_pre_phase_versions() -> None:
    versions = calculate(VersionState("0.0.1", "pre", 1, 0, "none"))
    assert versions.dev_version == "0.0.1-pre.1.dev.1"
    assert versions.rc_version == "0.0.1-pre.1.rel"
    assert versions.next_state == "0.0.1|pre|1|1|none"


def test_rc_phase_versions() -> None:
    versions = calculate(VersionState("1.3.0", "rc", 2, 9, "none"))
    assert versions.dev_version == "1.3.0-rc.2.dev.10"
    assert versions.rc_version == "1.3.0-rc.2.rel"
    assert versions.next_state == "1.3.0|rc|2|10|none"


def test_rtm_ships_the_bare_base() -> None:
    versions = calculate(VersionState("1.3.0", "rtm", 0, 2, "none"))
    assert versions.dev_version == "1.3.0-rtm.dev.3"
    assert versions.rc_version == "1.3.0"
    assert versions.next_state == "1.3.0|rtm|0|3|none"


def test_next_state_clears_pending() -> None:
    versions = calculate(VersionState("0.0.1", "pre", 1, 4, "prerelease"))
    assert versions.next_state.endswith("|none")


def test_does_not_mutate_input() -> None:
    state = VersionState("0.0.1", "pre", 1, 0, "none")
    calculate(state)
    assert state.dev_number == 0


def test_same_state_gives_same_versions() -> None:
    state = VersionState("0.2.0", "rc", 1, 3, "none")
    assert calculate(state) == calculate(state)


def test_next_state_can_be_persisted_and_read_back() -> None:
    state = VersionState("0.2.0", "rc", 1, 3, "none")
    fields = calculate(state).next_state
    restored = decode(f"<!-- VERSION_STATE: {fields} -->")
    assert restored == VersionState("0.2.0", "rc", 1, 4, "none")
    assert encode(restored).endswith(f"{fields} -->")


def test_unknown_phase_is_fatal() -> None:
    with pytest.raises(UnknownPhaseError, match="Unknown phase: beta"):
        calculate(VersionState("0.0.1", "beta", 1, 0, "none"))


def test_helpers_reject_unknown_phase() -> None:
    with pytest.raises(UnknownPhaseError):
        shippable_version("1.0.0", "ga", 1)
    with pytest.raises(UnknownPhaseError):
        dev_version("1.0.0", "ga", 1, 1)
