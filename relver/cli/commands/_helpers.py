from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import NoReturn

import typer

from relver.core.errors import ErrorCode
from relver.output.console import ConsoleProtocol
from relver.versioning.codec import releases_from_json
from relver.versioning.errors import VersionStateError
from relver.versioning.history import unparseable_tags
from relver.versioning.model import ReleaseInfo


def exit_with(console: ConsoleProtocol, message: str, *, code: ErrorCode) -> NoReturn:
    console.error(message)
    raise typer.Exit(code=int(code))


@contextmanager
def structural_errors(console: ConsoleProtocol) -> Iterator[None]:
    """Abort the command on corrupted state or malformed input documents."""
    try:
        yield
    except VersionStateError as e:
        exit_with(console, str(e), code=ErrorCode.STATE_ERROR)


def emit_json(payload: dict[str, object]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def optional_releases(text: str | None) -> tuple[ReleaseInfo, ...] | None:
    """Parse --releases-json, treating a missing or blank value as no history."""
    if text is None or not text.strip():
        return None
    return releases_from_json(text)


def warn_unparseable_tags(
    console: ConsoleProtocol, releases: Sequence[ReleaseInfo] | None, *, tag_prefix: str
) -> None:
    if not releases:
        return
    for tag in unparseable_tags(releases, tag_prefix=tag_prefix):
        console.warning(f"skipping release tag {tag!r}: not a valid version")
