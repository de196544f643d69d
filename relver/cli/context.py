from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from relver.core.config import Config, resolve_config
from relver.core.errors import ErrorCode
from relver.core.result import Err
from relver.output.console import ConsoleProtocol, RichConsole

VERBOSE_ENV_VAR = "RELVER_VERBOSE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole(verbose=os.environ.get(VERBOSE_ENV_VAR) == "1")

    config_result = resolve_config()
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(config=config_result.value, console=console)
