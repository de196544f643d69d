from __future__ import annotations

from typing import Sequence

from relver.core.config import DEFAULT_TAG_PREFIX
from relver.versioning.model import ReleaseInfo, ValidationResult
from relver.versioning.semver import Ordering, compare_versions, parse_version, strip_tag_prefix


def shipped_versions(
    releases: Sequence[ReleaseInfo], *, tag_prefix: str = DEFAULT_TAG_PREFIX
) -> list[str]:
    """Versions of all published (non-draft) releases; unparseable tags are skipped."""
    out: list[str] = []
    for r in releases:
        if r.is_draft:
            continue
        parsed = parse_version(strip_tag_prefix(r.tag_name, tag_prefix))
        if parsed is not None:
            out.append(str(parsed))
    return out


def unparseable_tags(
    releases: Sequence[ReleaseInfo], *, tag_prefix: str = DEFAULT_TAG_PREFIX
) -> list[str]:
    """Tags of published releases that `shipped_versions` leaves out."""
    return [
        r.tag_name
        for r in releases
        if not r.is_draft and parse_version(strip_tag_prefix(r.tag_name, tag_prefix)) is None
    ]


def validate(
    version: str,
    history: Sequence[ReleaseInfo] | None = None,
    *,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> ValidationResult:
    """Check that `version` could be shipped after everything in `history`.

    Without history only the syntax is checked.
    """
    version = version.strip()
    if parse_version(version) is None:
        return ValidationResult(False, f"Invalid version format: {version}")

    if history is None:
        return ValidationResult(True)

    for shipped in shipped_versions(history, tag_prefix=tag_prefix):
        if compare_versions(version, shipped) is not Ordering.GREATER:
            return ValidationResult(
                False,
                f"Version {version} would not be greater than already shipped version {shipped}. "
                "Cannot ship a version that is less than or equal to an existing release.",
            )

    return ValidationResult(True)
