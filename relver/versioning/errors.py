"""Structural errors of the version state machine.

These signal corrupted persisted state or a caller bug and are never
recovered from inside the library. Rejected requests (backward phase moves,
versions that would regress history) are not errors: they come back as
``valid=False`` results.
"""

from __future__ import annotations


class VersionStateError(Exception):
    """Base class for unrecoverable state problems."""


class DecodeError(VersionStateError):
    """Text handed to the codec carries no usable state marker."""


class UnknownPhaseError(VersionStateError):
    """A state carries a phase outside pre/rc/rtm."""

    def __init__(self, phase: str) -> None:
        super().__init__(f"Unknown phase: {phase}")
        self.phase = phase


class InvalidStateJsonError(VersionStateError):
    """A state or release-history JSON document is malformed."""
