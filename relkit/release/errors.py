"""Error payloads for the release pipeline.

Each family is a frozen dataclass with a human ``message`` and an optional
``hint``; ``kind`` separates sub-cases where the caller reacts differently.
The offending input (version text, URL, path) is always part of the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

__all__ = [
    "BuildError",
    "FetchError",
    "InputError",
    "ManifestError",
    "OutputError",
    "ParseError",
    "ReleaseError",
]


@dataclass(frozen=True, slots=True)
class InputError:
    """Malformed command input: a bad semver string or bump kind."""

    message: str
    value: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ManifestError:
    kind: Literal["not_found", "io_failure"]
    message: str
    path: Path
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ParseError:
    """A git remote URL without a recognizable ``owner/repo`` path."""

    message: str
    url: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class FetchError:
    kind: Literal["unreachable", "not_found"]
    message: str
    url: str
    status: int = 0
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class BuildError:
    """The compiler failed, or build state could not be persisted."""

    kind: Literal["compile_failed", "state_io"]
    message: str
    returncode: int = 1
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class OutputError:
    """A generated file could not be read or written."""

    message: str
    path: Path
    hint: str | None = None


ReleaseError = InputError | ManifestError | ParseError | FetchError | BuildError | OutputError
