from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import cmp_to_key
from typing import Callable, Literal


_CORE_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_DIGITS_RE = re.compile(r"^[0-9]+$")

IncrementKind = Literal["major", "minor", "patch"]


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of_ints(cls, a: int, b: int) -> Ordering:
        return cls((a > b) - (a < b))

    @classmethod
    def of_strs(cls, a: str, b: str) -> Ordering:
        return cls((a > b) - (a < b))


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self, prefix: str = "v") -> str:
        return f"{prefix}{self}"

    def bump(self, kind: IncrementKind) -> SemVer:
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def next_auto(self) -> SemVer:
        """Next base after a stable release: patch while 0.x.y, minor afterwards."""
        if self.major == 0:
            return self.bump("patch")
        return self.bump("minor")


@dataclass(frozen=True, slots=True)
class ParsedVersion:
    """A syntactically valid SemVer 2.0 version."""

    core: SemVer
    prerelease: str
    build: str

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        out = str(self.core)
        if self.prerelease:
            out += f"-{self.prerelease}"
        if self.build:
            out += f"+{self.build}"
        return out


def parse_base(text: str) -> SemVer | None:
    """Parse a strict ``X.Y.Z`` core version."""
    m = _CORE_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def parse_version(text: str) -> ParsedVersion | None:
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    core = SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    return ParsedVersion(core=core, prerelease=m.group(4) or "", build=m.group(5) or "")


def is_valid_version(text: str) -> bool:
    return parse_version(text) is not None


def strip_tag_prefix(tag: str, prefix: str = "v") -> str:
    tag = tag.strip()
    if prefix and tag.startswith(prefix):
        return tag[len(prefix) :]
    return tag


# -----------------------------------------------------------------------------
# Ordering
# -----------------------------------------------------------------------------


def _split(version: str) -> tuple[str, str]:
    """Split into (core, prerelease), dropping +build metadata."""
    version = version.split("+", 1)[0]
    core, sep, prerelease = version.partition("-")
    if not sep:
        return (core, "")
    return (core, prerelease)


def _as_int(segment: str) -> int | None:
    if _DIGITS_RE.match(segment) is None:
        return None
    return int(segment)


def _compare_core(a: str, b: str) -> Ordering:
    parts_a = a.split(".")
    parts_b = b.split(".")
    for i in range(max(len(parts_a), len(parts_b))):
        num_a = _as_int(parts_a[i]) if i < len(parts_a) else None
        num_b = _as_int(parts_b[i]) if i < len(parts_b) else None
        order = Ordering.of_ints(num_a or 0, num_b or 0)
        if order is not Ordering.EQUAL:
            return order
    return Ordering.EQUAL


def _compare_prerelease(a: str, b: str) -> Ordering:
    segments_a = a.split(".")
    segments_b = b.split(".")
    for i in range(max(len(segments_a), len(segments_b))):
        seg_a = segments_a[i] if i < len(segments_a) else ""
        seg_b = segments_b[i] if i < len(segments_b) else ""
        num_a = _as_int(seg_a)
        num_b = _as_int(seg_b)

        if num_a is not None and num_b is not None:
            order = Ordering.of_ints(num_a, num_b)
        elif num_a is not None:
            order = Ordering.LESS
        elif num_b is not None:
            order = Ordering.GREATER
        else:
            order = Ordering.of_strs(seg_a.upper(), seg_b.upper())

        if order is not Ordering.EQUAL:
            return order
    return Ordering.EQUAL


def compare_versions(a: str, b: str) -> Ordering:
    """Order two version strings.

    Tolerates malformed input: non-numeric core components count as 0 and the
    empty string sorts below everything else. A stable version sorts above any
    pre-release of the same core; pre-release identifiers compare segment by
    segment, numerically where both segments are numbers.
    """
    if not a and not b:
        return Ordering.EQUAL
    if not a:
        return Ordering.LESS
    if not b:
        return Ordering.GREATER

    core_a, pre_a = _split(a)
    core_b, pre_b = _split(b)

    order = _compare_core(core_a, core_b)
    if order is not Ordering.EQUAL:
        return order

    if not pre_a and not pre_b:
        return Ordering.EQUAL
    if not pre_a:
        return Ordering.GREATER
    if not pre_b:
        return Ordering.LESS
    return _compare_prerelease(pre_a, pre_b)


def _cmp(a: str, b: str) -> int:
    return int(compare_versions(a, b))


version_key: Callable[[str], object] = cmp_to_key(_cmp)


def max_version(versions: list[str]) -> str | None:
    if not versions:
        return None
    return max(versions, key=version_key)


# -----------------------------------------------------------------------------
# Build classification
# -----------------------------------------------------------------------------


class BuildType(Enum):
    DEV = "dev"
    PRERELEASE = "prerelease"
    STABLE = "stable"

    def __str__(self) -> str:
        return self.value


def build_type(version: str) -> BuildType:
    """Classify a version string by the kind of build that produced it."""
    if not version:
        return BuildType.STABLE
    if "dev." in version.lower():
        return BuildType.DEV
    if "-" in version:
        return BuildType.PRERELEASE
    return BuildType.STABLE


def is_update_available(current: str, candidate: str, current_type: BuildType) -> bool:
    """Whether `candidate` should be offered to a user running `current`.

    Dev builds follow every newer version, pre-release builds follow newer
    pre-releases and stables, stable builds only follow newer stables.
    """
    if not candidate:
        return False
    if compare_versions(current, candidate) is not Ordering.LESS:
        return False

    if current_type is BuildType.DEV:
        return True

    candidate_type = build_type(candidate)
    if current_type is BuildType.PRERELEASE:
        return candidate_type in (BuildType.PRERELEASE, BuildType.STABLE)
    return candidate_type is BuildType.STABLE
