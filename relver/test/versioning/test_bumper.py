from __future__ import annotations

import pytest

from relver.versioning.bumper import bump
from relver.versioning.errors import UnknownPhaseError
from relver.versioning.model import ReleaseInfo, VersionState


def _state(base: str = "0.0.1", phase: str = "pre", phase_number: int = 1) -> VersionState:
    return VersionState(base, phase, 0 if phase == "rtm" else phase_number, 5, "none")


def _release(tag: str, *, prerelease: bool = False) -> ReleaseInfo:
    return ReleaseInfo(tag_name=tag, is_draft=False, is_prerelease=prerelease)


class TestPhaseTransitions:
    @pytest.mark.parametrize(
        ("current", "target"),
        [("pre", "rc"), ("pre", "rtm"), ("rc", "rtm")],
    )
    def test_forward_without_bump_succeeds(self, current: str, target: str) -> None:
        result = bump(_state(phase=current, phase_number=3), "none", target)
        assert result.valid
        assert result.reason is None
        assert result.new_state == VersionState(
            "0.0.1", target, 0 if target == "rtm" else 1, 0, "none"
        )

    @pytest.mark.parametrize(
        ("current", "target"),
        [("rc", "pre"), ("rtm", "pre"), ("rtm", "rc")],
    )
    def test_backward_without_bump_fails(self, current: str, target: str) -> None:
        result = bump(_state(phase=current), "none", target)
        assert not result.valid
        assert result.new_state is None
        assert f"Cannot move from phase '{current}' to '{target}'" in (result.reason or "")

    @pytest.mark.parametrize("phase", ["pre", "rc", "rtm"])
    def test_same_phase_without_bump_is_a_no_op(self, phase: str) -> None:
        result = bump(_state(phase=phase), "none", phase)
        assert not result.valid
        assert "No change requested" in (result.reason or "")

    def test_backward_with_bump_succeeds(self) -> None:
        result = bump(_state("1.2.0", "rtm"), "minor", "pre")
        assert result.valid
        assert result.new_state == VersionState("1.3.0", "pre", 1, 0, "none")


class TestBaseBumps:
    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            ("patch", "1.2.4"),
            ("minor", "1.3.0"),
            ("major", "2.0.0"),
            ("auto", "1.3.0"),
            ("none", "1.2.3"),
        ],
    )
    def test_kinds(self, kind: str, expected: str) -> None:
        result = bump(_state("1.2.3", "pre"), kind, "rc")
        assert result.new_state is not None
        assert result.new_state.base == expected

    def test_auto_with_zero_major_bumps_patch(self) -> None:
        result = bump(_state("0.4.2"), "auto", "pre")
        assert result.new_state == VersionState("0.4.3", "pre", 1, 0, "none")

    def test_kind_is_case_insensitive(self) -> None:
        assert bump(_state("1.0.0"), "MINOR", "pre").valid

    def test_bump_into_same_phase_is_allowed(self) -> None:
        result = bump(_state("0.0.1", "pre", 4), "patch", "pre")
        assert result.new_state == VersionState("0.0.2", "pre", 1, 0, "none")


class TestRejections:
    def test_unknown_bump_kind(self) -> None:
        result = bump(_state(), "huge", "rc")
        assert not result.valid
        assert result.reason == "Unknown version bump type: huge"

    def test_unknown_target_phase(self) -> None:
        result = bump(_state(), "none", "beta")
        assert not result.valid
        assert (result.reason or "").startswith("Unknown phase: beta")

    def test_corrupt_current_phase_is_fatal(self) -> None:
        with pytest.raises(UnknownPhaseError):
            bump(VersionState("0.0.1", "beta", 1, 0, "none"), "none", "rc")


class TestHistoryValidation:
    def test_conflict_with_shipped_release_fails(self) -> None:
        history = [_release("v0.0.1")]
        result = bump(_state("0.0.1", "rc"), "none", "rtm", history)
        assert not result.valid
        assert "0.0.1" in (result.reason or "")

    def test_proposed_version_uses_first_iteration(self) -> None:
        # rc.1.rel of 0.0.2 is below the already shipped rc.2
        history = [_release("v0.0.2-rc.2.rel", prerelease=True)]
        result = bump(_state("0.0.1", "rtm"), "patch", "rc", history)
        assert not result.valid
        assert "0.0.2-rc.2.rel" in (result.reason or "")

    def test_passes_with_clean_history(self) -> None:
        history = [_release("v0.0.1"), _release("v0.0.2-pre.3.rel", prerelease=True)]
        result = bump(_state("0.0.2", "pre", 4), "none", "rc", history)
        assert result.valid
        assert result.new_state == VersionState("0.0.2", "rc", 1, 0, "none")
