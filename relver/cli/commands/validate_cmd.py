from __future__ import annotations

import typer

from relver.cli.commands._helpers import (
    emit_json,
    optional_releases,
    structural_errors,
    warn_unparseable_tags,
)
from relver.cli.context import build_context
from relver.core.errors import ErrorCode
from relver.versioning.history import validate as validate_version


def validate(
    version: str = typer.Option(..., "--version", help="Version to validate"),
    releases_json: str | None = typer.Option(
        None, "--releases-json", help="JSON array of shipped releases"
    ),
) -> None:
    """Check if a version could be shipped."""
    ctx = build_context()

    with structural_errors(ctx.console):
        history = optional_releases(releases_json)

    tag_prefix = ctx.config.versioning.tag_prefix
    warn_unparseable_tags(ctx.console, history, tag_prefix=tag_prefix)
    result = validate_version(version, history, tag_prefix=tag_prefix)
    emit_json(result.to_json())
    if not result.valid:
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
