"""End-to-end behaviour of the state machine across a release lifecycle."""

from __future__ import annotations

import pytest

from relver.versioning.advancer import advance
from relver.versioning.bumper import bump
from relver.versioning.calculator import calculate
from relver.versioning.codec import decode, encode, state_from_releases
from relver.versioning.history import validate
from relver.versioning.model import ReleaseInfo, VersionState
from relver.versioning.semver import Ordering, compare_versions


def _ship(state: VersionState) -> tuple[str, VersionState]:
    shipped = calculate(state).rc_version
    return shipped, advance(state, shipped)


@pytest.mark.parametrize(
    "start",
    [
        VersionState("0.0.1", "pre", 1, 0, "none"),
        VersionState("0.3.0", "rc", 2, 7, "none"),
        VersionState("1.0.0", "rtm", 0, 1, "none"),
    ],
)
def test_shipped_versions_strictly_increase(start: VersionState) -> None:
    state = start
    previous: str | None = None
    for _ in range(12):
        shipped, state = _ship(state)
        if previous is not None:
            assert compare_versions(previous, shipped) is Ordering.LESS
        previous = shipped


def test_full_cycle_with_history_checks() -> None:
    history: list[ReleaseInfo] = []
    state = state_from_releases(history)
    shipped_log: list[str] = []

    def ship(current: VersionState) -> VersionState:
        versions = calculate(current)
        assert validate(versions.rc_version, history).valid
        history.append(
            ReleaseInfo(
                tag_name=f"v{versions.rc_version}",
                is_draft=False,
                is_prerelease="-" in versions.rc_version,
            )
        )
        shipped_log.append(versions.rc_version)
        return advance(current, versions.rc_version)

    state = ship(state)
    state = ship(state)

    result = bump(state, "none", "rc", history)
    assert result.valid and result.new_state is not None
    state = ship(result.new_state)

    result = bump(state, "none", "rtm", history)
    assert result.valid and result.new_state is not None
    state = ship(result.new_state)

    assert shipped_log == [
        "0.0.1-pre.1.rel",
        "0.0.1-pre.2.rel",
        "0.0.1-rc.1.rel",
        "0.0.1",
    ]
    assert state == VersionState("0.0.2", "pre", 1, 0, "none")

    # Re-initializing from the same history continues after the stable release.
    assert state_from_releases(history) == state
    # Shipping 0.0.1 again is refused.
    assert not validate("0.0.1", history).valid


def test_retry_resumes_at_same_version() -> None:
    """A publish that crashed before advance is re-run from the persisted state."""
    persisted = encode(VersionState("0.5.0", "rc", 1, 3, "prerelease"))

    first = calculate(decode(persisted))
    retry = calculate(decode(persisted))

    assert first.rc_version == retry.rc_version == "0.5.0-rc.1.rel"
    assert first.dev_version == retry.dev_version


def test_dev_builds_increase_between_shipments() -> None:
    state = VersionState("0.0.1", "pre", 1, 0, "none")
    dev_versions: list[str] = []
    for _ in range(11):
        versions = calculate(state)
        dev_versions.append(versions.dev_version)
        state = decode(f"<!-- VERSION_STATE: {versions.next_state} -->")

    for lower, higher in zip(dev_versions, dev_versions[1:]):
        assert compare_versions(lower, higher) is Ordering.LESS
    assert compare_versions(dev_versions[-1], calculate(state).rc_version) is Ordering.LESS
