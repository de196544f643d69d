"""State commands - read the persisted state and render its marker."""

from __future__ import annotations

import sys
from pathlib import Path

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
from relver.versioning.codec import (
    decode_with_format,
    embed_state,
    encode,
    initial_state,
    latest_stable_version,
    state_from_json,
    state_from_releases,
)


def _read_body_file(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def state(
    body: str | None = typer.Option(None, "--body", help="Release body to parse"),
    body_file: Path | None = typer.Option(
        None, "--body-file", help="Read the release body from a file ('-' for stdin)"
    ),
    releases_json: str | None = typer.Option(
        None, "--releases-json", help="JSON array of releases for initialization"
    ),
) -> None:
    """Read version state from a release body, or initialize it from history."""
    ctx = build_context()
    settings = ctx.config.versioning

    if body_file is not None:
        try:
            body = _read_body_file(body_file)
        except OSError as e:
            exit_with(ctx.console, f"failed to read --body-file: {e}", code=ErrorCode.USER_ERROR)

    with structural_errors(ctx.console):
        if body:
            current, fmt = decode_with_format(body, marker=settings.marker)
            if fmt == "legacy":
                ctx.console.warning(
                    f"{settings.marker} uses the legacy stage encoding; "
                    "it will be rewritten on the next update"
                )
        else:
            releases = optional_releases(releases_json)
            if releases is not None:
                warn_unparseable_tags(ctx.console, releases, tag_prefix=settings.tag_prefix)
                latest = latest_stable_version(releases, tag_prefix=settings.tag_prefix)
                ctx.console.info(f"latest stable release: {latest or 'none'}")
                current = state_from_releases(
                    releases,
                    initial_version=settings.initial_version,
                    tag_prefix=settings.tag_prefix,
                )
            else:
                ctx.console.info(f"no state given, starting at {settings.initial_version}")
                current = initial_state(settings.initial_version)

    emit_json(current.to_json())


def encode_state(
    state_json: str = typer.Option(..., "--state", help="Version state as JSON"),
    body: str | None = typer.Option(
        None, "--body", help="Release body to embed the marker into"
    ),
) -> None:
    """Render the state marker, or a release body with the marker embedded."""
    ctx = build_context()
    marker = ctx.config.versioning.marker

    with structural_errors(ctx.console):
        current = state_from_json(state_json)

    if body is None:
        typer.echo(encode(current, marker=marker))
    else:
        typer.echo(embed_state(body, current, marker=marker), nl=False)
