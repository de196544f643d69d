"""Typed configuration loading and access.

Configuration is optional. Every field has a default matching the historic
behaviour of the release scripts, so a missing file is never an error; a file
that exists but cannot be parsed is.

Example ``relver.toml``::

    [versioning]
    initial_version = "0.0.1"
    tag_prefix = "v"
    marker = "VERSION_STATE"
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_table

__all__ = [
    "Config",
    "ConfigError",
    "VersioningConfig",
    "load_config",
    "resolve_config",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_INITIAL_VERSION",
    "DEFAULT_MARKER",
    "DEFAULT_TAG_PREFIX",
]

CONFIG_ENV_VAR = "RELVER_CONFIG"
DEFAULT_CONFIG_FILE = "relver.toml"

DEFAULT_INITIAL_VERSION = "0.0.1"
DEFAULT_TAG_PREFIX = "v"
DEFAULT_MARKER = "VERSION_STATE"

_MARKER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class VersioningConfig:
    """Settings for the version state machine.

    Attributes:
        initial_version: Base used when neither a state marker nor a stable
            release exists.
        tag_prefix: Prefix stripped from release tags before parsing.
        marker: Name written inside the ``<!-- NAME: ... -->`` comment.
    """

    initial_version: str = DEFAULT_INITIAL_VERSION
    tag_prefix: str = DEFAULT_TAG_PREFIX
    marker: str = DEFAULT_MARKER


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    versioning: VersioningConfig = field(default_factory=VersioningConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but unusable.
        """
        # deferred: relver.versioning imports the defaults from this module
        from relver.versioning.semver import parse_base

        section: StrDict = get_table(data, "versioning") or {}

        initial = section.get("initial_version", DEFAULT_INITIAL_VERSION)
        if not isinstance(initial, str) or parse_base(initial) is None:
            raise ValueError(f"versioning.initial_version must be X.Y.Z, got {initial!r}")

        marker = section.get("marker", DEFAULT_MARKER)
        if not isinstance(marker, str) or _MARKER_RE.match(marker) is None:
            raise ValueError(f"versioning.marker must be an identifier, got {marker!r}")

        # An explicit empty prefix is meaningful: tags carry no prefix at all.
        raw_prefix = section.get("tag_prefix", DEFAULT_TAG_PREFIX)
        if not isinstance(raw_prefix, str):
            raise ValueError("versioning.tag_prefix must be a string")

        return cls(
            versioning=VersioningConfig(
                initial_version=initial.strip(),
                tag_prefix=raw_prefix.strip(),
                marker=marker,
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling import and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def resolve_config(
    explicit: Path | None = None,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[Config, ConfigError]:
    """Find and load the effective configuration.

    Lookup order: ``explicit`` path, then the ``RELVER_CONFIG`` environment
    variable, then ``relver.toml`` in ``cwd``. Explicit locations must exist;
    the implicit ``relver.toml`` is optional and defaults apply without it.
    """
    environ = os.environ if env is None else env

    if explicit is not None:
        return load_config(explicit.expanduser())

    from_env = environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return load_config(Path(from_env).expanduser())

    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILE
    if candidate.is_file():
        return load_config(candidate)

    return Ok(Config())
