from __future__ import annotations

import typer

from relver.cli.commands._helpers import (
    emit_json,
    exit_with,
    optional_releases,
    structural_errors,
    warn_unparseable_tags,
)
from relver.cli.context import build_context
from relver.core.errors import ErrorCode
from relver.versioning.bumper import bump as bump_state
from relver.versioning.codec import state_from_json


def bump(
    state_json: str = typer.Option(..., "--state", help="Current version state as JSON"),
    version_bump: str = typer.Option(
        ..., "--version-bump", help="none, auto, patch, minor, major"
    ),
    phase: str = typer.Option(..., "--phase", help="pre, rc, rtm"),
    releases_json: str | None = typer.Option(
        None, "--releases-json", help="JSON array of releases for validation"
    ),
) -> None:
    """Apply a version bump and/or phase change."""
    ctx = build_context()
    tag_prefix = ctx.config.versioning.tag_prefix

    with structural_errors(ctx.console):
        current = state_from_json(state_json)
        history = optional_releases(releases_json)
        warn_unparseable_tags(ctx.console, history, tag_prefix=tag_prefix)
        result = bump_state(
            current,
            version_bump,
            phase.strip().lower(),
            history,
            tag_prefix=tag_prefix,
        )

    emit_json(result.to_json())
    if not result.valid:
        exit_with(ctx.console, result.reason or "bump rejected", code=ErrorCode.USER_ERROR)
