"""Encoding of VersionState.

The state is persisted as one marker comment inside a free-form release body:

    <!-- VERSION_STATE: 1.2.0|rc|2|5|none -->

Fields are ``base|phase|phaseNumber|devNumber|pending``. Older bodies used a
``stage`` field limited to pre/rtm, with four fields or an empty fifth one;
those are still read and normalized into the same model. A missing or empty
``pending`` field reads as ``none`` whatever the phase.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Literal, Sequence

from relver.core.config import DEFAULT_INITIAL_VERSION, DEFAULT_MARKER, DEFAULT_TAG_PREFIX
from relver.core.structured import as_obj_list, as_str_dict, get_bool, get_int, get_str
from relver.versioning.errors import DecodeError, InvalidStateJsonError, UnknownPhaseError
from relver.versioning.model import PENDING_VALUES, PHASES, ReleaseInfo, VersionState
from relver.versioning.semver import max_version, parse_base, parse_version, strip_tag_prefix


EncodingFormat = Literal["canonical", "legacy"]


@dataclass(frozen=True, slots=True)
class _MarkerFormat:
    name: EncodingFormat
    fields: str  # regex for the part after "NAME:"

    def pattern(self, marker: str) -> re.Pattern[str]:
        return re.compile(rf"<!--\s*{re.escape(marker)}:\s*{self.fields}\s*-->")


_FIELD = r"\s*([^|>]+?)\s*"
_NUMBER = r"\s*(\d+)\s*"

# Tried in order; the first match wins.
_FORMATS: tuple[_MarkerFormat, ...] = (
    _MarkerFormat(
        name="canonical",
        fields=rf"{_FIELD}\|{_FIELD}\|{_NUMBER}\|{_NUMBER}\|\s*([^|>\s]+)",
    ),
    _MarkerFormat(
        name="legacy",
        fields=rf"{_FIELD}\|\s*(pre|rtm)\s*\|{_NUMBER}\|{_NUMBER}(?:\|\s*([^|>\s]*))?",
    ),
    # pending omitted or left empty
    _MarkerFormat(
        name="canonical",
        fields=rf"{_FIELD}\|{_FIELD}\|{_NUMBER}\|{_NUMBER}(?:\|\s*([^|>\s]*))?",
    ),
)


def _any_marker(marker: str) -> re.Pattern[str]:
    return re.compile(rf"<!--\s*{re.escape(marker)}:.*?-->", re.DOTALL)


def _normalized(
    *,
    base: str,
    phase: str,
    phase_number: int,
    dev_number: int,
    pending: str,
    error: type[DecodeError] | type[InvalidStateJsonError],
) -> VersionState:
    if parse_base(base) is None:
        raise error(f"Invalid base version: {base!r} (expected X.Y.Z)")
    if phase not in PHASES:
        raise UnknownPhaseError(phase)
    if pending not in PENDING_VALUES:
        raise error(f"Unknown pending value: {pending!r}")
    if dev_number < 0:
        raise error(f"devNumber must not be negative, got {dev_number}")

    if phase == "rtm":
        # rtm has no iterations
        phase_number = 0
    elif phase_number < 1:
        raise error(f"phaseNumber must be >= 1 for phase '{phase}', got {phase_number}")

    return VersionState(
        base=base.strip(),
        phase=phase,
        phase_number=phase_number,
        dev_number=dev_number,
        pending=pending,
    )


# -----------------------------------------------------------------------------
# Marker text
# -----------------------------------------------------------------------------


def encode_fields(state: VersionState) -> str:
    """The bare ``base|phase|phaseNumber|devNumber|pending`` form."""
    return f"{state.base}|{state.phase}|{state.phase_number}|{state.dev_number}|{state.pending}"


def encode(state: VersionState, *, marker: str = DEFAULT_MARKER) -> str:
    """Render `state` as the marker comment stored in a release body."""
    return f"<!-- {marker}: {encode_fields(state)} -->"


def decode_with_format(
    text: str, *, marker: str = DEFAULT_MARKER
) -> tuple[VersionState, EncodingFormat]:
    """Decode the first state marker in `text`, reporting which encoding matched.

    Raises:
        DecodeError: No marker in `text`, or its fields are unusable.
        UnknownPhaseError: The marker names a phase outside pre/rc/rtm.
    """
    for fmt in _FORMATS:
        m = fmt.pattern(marker).search(text)
        if m is None:
            continue

        base, phase, phase_number, dev_number, pending = m.groups()
        state = _normalized(
            base=base,
            phase=phase.strip(),
            phase_number=int(phase_number),
            dev_number=int(dev_number),
            pending=(pending or "").strip() or "none",
            error=DecodeError,
        )
        return (state, fmt.name)

    if _any_marker(marker).search(text) is not None:
        raise DecodeError(f"Malformed {marker} marker in release body")
    raise DecodeError(f"Could not parse {marker} from release body")


def decode(text: str, *, marker: str = DEFAULT_MARKER) -> VersionState:
    return decode_with_format(text, marker=marker)[0]


def embed_state(body: str, state: VersionState, *, marker: str = DEFAULT_MARKER) -> str:
    """Return `body` with its state marker replaced, or appended if absent."""
    line = encode(state, marker=marker)
    pattern = _any_marker(marker)
    if pattern.search(body) is not None:
        return pattern.sub(lambda _m: line, body, count=1)
    if not body.strip():
        return line + "\n"
    return body.rstrip("\n") + "\n\n" + line + "\n"


# -----------------------------------------------------------------------------
# Release history
# -----------------------------------------------------------------------------


def initial_state(base: str = DEFAULT_INITIAL_VERSION) -> VersionState:
    return VersionState(base=base, phase="pre", phase_number=1, dev_number=0, pending="none")


def latest_stable_version(
    releases: Sequence[ReleaseInfo], *, tag_prefix: str = DEFAULT_TAG_PREFIX
) -> str | None:
    """Highest parseable tag among published, non-prerelease releases."""
    candidates: list[str] = []
    for r in releases:
        if r.is_draft or r.is_prerelease:
            continue
        parsed = parse_version(strip_tag_prefix(r.tag_name, tag_prefix))
        if parsed is not None:
            candidates.append(str(parsed))
    return max_version(candidates)


def state_from_releases(
    releases: Sequence[ReleaseInfo],
    *,
    initial_version: str = DEFAULT_INITIAL_VERSION,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> VersionState:
    """Start a fresh pre.1 iteration after the latest stable release."""
    latest = latest_stable_version(releases, tag_prefix=tag_prefix)
    if latest is None:
        return initial_state(initial_version)

    parsed = parse_version(latest)
    assert parsed is not None
    return initial_state(str(parsed.core.next_auto()))


# -----------------------------------------------------------------------------
# JSON documents
# -----------------------------------------------------------------------------


def _load_json(text: str, *, what: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidStateJsonError(f"Invalid {what} JSON: {e}") from e


def state_to_json(state: VersionState) -> str:
    return json.dumps(state.to_json(), indent=2)


def state_from_json(text: str) -> VersionState:
    """Parse the camelCase state document produced by `state_to_json`.

    Raises:
        InvalidStateJsonError: Not an object, or a field is missing or mistyped.
        UnknownPhaseError: The phase is outside pre/rc/rtm.
    """
    data = as_str_dict(_load_json(text, what="state"))
    if data is None:
        raise InvalidStateJsonError("Invalid state JSON: expected an object")

    base = get_str(data, "base")
    phase = get_str(data, "phase")
    phase_number = get_int(data, "phaseNumber")
    dev_number = get_int(data, "devNumber")
    pending = data.get("pending", "none")

    missing = [
        key
        for key, value in (
            ("base", base),
            ("phase", phase),
            ("phaseNumber", phase_number),
            ("devNumber", dev_number),
        )
        if value is None
    ]
    if missing:
        raise InvalidStateJsonError(f"Invalid state JSON: missing or invalid {', '.join(missing)}")
    if pending is None:
        pending = "none"
    if not isinstance(pending, str):
        raise InvalidStateJsonError("Invalid state JSON: pending must be a string")

    assert base is not None and phase is not None
    assert phase_number is not None and dev_number is not None
    return _normalized(
        base=base,
        phase=phase,
        phase_number=phase_number,
        dev_number=dev_number,
        pending=pending.strip() or "none",
        error=InvalidStateJsonError,
    )


def releases_from_json(text: str) -> tuple[ReleaseInfo, ...]:
    """Parse a ``[{"tagName", "isDraft", "isPrerelease"}, ...]`` array.

    Raises:
        InvalidStateJsonError: Not an array, or an entry has no tag name.
    """
    items = as_obj_list(_load_json(text, what="releases"))
    if items is None:
        raise InvalidStateJsonError("Invalid releases JSON: expected an array")

    out: list[ReleaseInfo] = []
    for i, item in enumerate(items):
        entry = as_str_dict(item)
        if entry is None:
            raise InvalidStateJsonError(f"Invalid releases JSON: entry {i} is not an object")
        tag = get_str(entry, "tagName")
        if tag is None:
            raise InvalidStateJsonError(f"Invalid releases JSON: entry {i} has no tagName")
        out.append(
            ReleaseInfo(
                tag_name=tag,
                is_draft=get_bool(entry, "isDraft") or False,
                is_prerelease=get_bool(entry, "isPrerelease") or False,
            )
        )
    return tuple(out)
