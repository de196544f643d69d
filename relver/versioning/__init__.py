"""Release version state machine.

Pure functions over immutable values:
- calculate: versions for the next build of a state
- advance: state after a confirmed shipment
- bump: operator-requested base bump and/or phase change
- validate: monotonicity check against shipped releases
- decode/encode: the marker persisted in release bodies
"""

from .advancer import advance
from .bumper import bump
from .calculator import calculate, shippable_version
from .codec import (
    decode,
    decode_with_format,
    embed_state,
    encode,
    encode_fields,
    initial_state,
    releases_from_json,
    state_from_json,
    state_from_releases,
    state_to_json,
)
from .errors import DecodeError, InvalidStateJsonError, UnknownPhaseError, VersionStateError
from .history import unparseable_tags, validate
from .model import (
    BumpResult,
    CalculatedVersions,
    ReleaseInfo,
    ValidationResult,
    VersionState,
)
from .semver import BuildType, Ordering, build_type, compare_versions, is_update_available

__all__ = [
    # operations
    "advance",
    "bump",
    "calculate",
    "shippable_version",
    "unparseable_tags",
    "validate",
    # codec
    "decode",
    "decode_with_format",
    "embed_state",
    "encode",
    "encode_fields",
    "initial_state",
    "releases_from_json",
    "state_from_json",
    "state_from_releases",
    "state_to_json",
    # errors
    "DecodeError",
    "InvalidStateJsonError",
    "UnknownPhaseError",
    "VersionStateError",
    # model
    "BumpResult",
    "CalculatedVersions",
    "ReleaseInfo",
    "ValidationResult",
    "VersionState",
    # semver
    "BuildType",
    "Ordering",
    "build_type",
    "compare_versions",
    "is_update_available",
]
