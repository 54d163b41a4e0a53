"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from relkit.core.errors import ErrorCode
from relkit.output.console import Style
from relkit.release.errors import (
    BuildError,
    FetchError,
    InputError,
    ManifestError,
    OutputError,
    ParseError,
    ReleaseError,
)

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol


def error_code(error: ReleaseError) -> ErrorCode:
    """Map a release error onto the process exit code."""
    match error:
        case InputError():
            return ErrorCode.USER_ERROR
        case ManifestError(kind="not_found"):
            return ErrorCode.USER_ERROR
        case ManifestError():
            return ErrorCode.IO_ERROR
        case ParseError():
            return ErrorCode.ENV_ERROR
        case FetchError():
            return ErrorCode.NETWORK_ERROR
        case BuildError(kind="compile_failed"):
            return ErrorCode.BUILD_ERROR
        case BuildError() | OutputError():
            return ErrorCode.IO_ERROR


def fail(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    """Print ``error`` (and its hint) to stderr and exit with its code."""
    console.error(error.message)
    if error.hint:
        console.note(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(error_code(error)))
