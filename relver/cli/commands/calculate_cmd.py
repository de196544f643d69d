"""Build-time commands - versions for the next build, and advancing after a ship."""

from __future__ import annotations

import typer

from relver.cli.commands._helpers import emit_json, structural_errors
from relver.cli.context import build_context
from relver.versioning.advancer import advance as advance_state
from relver.versioning.calculator import calculate as calculate_versions
from relver.versioning.codec import state_from_json


def calculate(
    state_json: str = typer.Option(..., "--state", help="Version state as JSON"),
) -> None:
    """Calculate dev and RC versions from state."""
    ctx = build_context()

    with structural_errors(ctx.console):
        current = state_from_json(state_json)
        versions = calculate_versions(current)

    ctx.console.info(f"dev {versions.dev_version}, ships as {versions.rc_version}")
    emit_json(versions.to_json())


def advance(
    state_json: str = typer.Option(..., "--state", help="Current version state as JSON"),
    shipped_version: str = typer.Option(
        ..., "--shipped-version", help="The version that was just shipped"
    ),
) -> None:
    """Calculate the next state after a release is shipped."""
    ctx = build_context()

    with structural_errors(ctx.console):
        current = state_from_json(state_json)
        following = advance_state(current, shipped_version)

    ctx.console.info(f"shipped {shipped_version}")
    emit_json(following.to_json())
