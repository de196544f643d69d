from __future__ import annotations

import pytest

from relver.versioning.advancer import advance
from relver.versioning.errors import DecodeError, UnknownPhaseError
from relver.versioning.model import VersionState


def test_pre_moves_to_next_iteration() -> None:
    state = VersionState("0.0.1", "pre", 1, 6, "prerelease")
    assert advance(state, "0.0.1-pre.1.rel") == VersionState("0.0.1", "pre", 2, 0, "none")


def test_rc_moves_to_next_iteration() -> None:
    state = VersionState("1.2.0", "rc", 3, 1, "none")
    assert advance(state, "1.2.0-rc.3.rel") == VersionState("1.2.0", "rc", 4, 0, "none")


def test_rtm_zero_major_starts_next_patch() -> None:
    state = VersionState("0.0.1", "rtm", 0, 3, "stable")
    assert advance(state, "0.0.1") == VersionState("0.0.2", "pre", 1, 0, "none")


def test_rtm_starts_next_minor() -> None:
    state = VersionState("2.4.1", "rtm", 0, 0, "none")
    assert advance(state, "2.4.1") == VersionState("2.5.0", "pre", 1, 0, "none")


def test_unknown_phase_is_fatal() -> None:
    with pytest.raises(UnknownPhaseError):
        advance(VersionState("0.0.1", "ga", 1, 0, "none"), "0.0.1")


def test_rtm_with_corrupt_base_is_fatal() -> None:
    with pytest.raises(DecodeError):
        advance(VersionState("1.0", "rtm", 0, 0, "none"), "1.0")
