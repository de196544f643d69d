"""Error codes for CLI exit status.

Exit codes separate the failure families of the tool:
- 1: the request was understood but rejected (invalid transition, version
  that would regress shipment history, bad option value)
- 2: left to typer/click for command-line usage errors
- 3: the persisted state or an input document is structurally broken
  (missing marker, malformed JSON, unknown phase)
- 4: the configuration file could not be loaded
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    USER_ERROR = 1
    STATE_ERROR = 3
    CONFIG_ERROR = 4

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
