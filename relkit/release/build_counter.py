"""Persisted build counter.

The counter lives in a one-line text file (``build/build-number`` by default).
Each build invocation reads it, adds one, writes it back and exports the new
value to the compiler as ``BUILD_NUMBER``.

Missing, empty or non-integer content counts as 0, so a deleted or corrupted
state file heals on the next build instead of failing it.

The read-increment-write sequence takes no lock. Two builds running at the
same time against the same file can produce a duplicate or skipped number;
callers that need strict uniqueness must serialize builds (one CI runner) or
pass an externally assigned number such as a CI run id.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from relkit.platform.files import atomic_write_text

__all__ = [
    "BUILD_NUMBER_ENV",
    "BuildCounter",
    "CounterStore",
    "FileCounterStore",
    "MemoryCounterStore",
    "VERSION_BANNER_ENV",
    "build_env",
    "external_build_number",
    "parse_counter",
]

BUILD_NUMBER_ENV = "BUILD_NUMBER"
VERSION_BANNER_ENV = "PKG_VERSION_WITH_BUILD"

_COUNTER_RE = re.compile(r"[0-9]+")


class CounterStore(Protocol):
    def load(self) -> str | None:
        """Return the raw persisted text, or None when nothing is stored."""
        ...

    def save(self, text: str) -> None:
        """Persist ``text``; raises OSError on failure."""
        ...


class FileCounterStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError, UnicodeDecodeError):
            return None

    def save(self, text: str) -> None:
        atomic_write_text(self.path, text, encoding="utf-8")


class MemoryCounterStore:
    def __init__(self, text: str | None = None) -> None:
        self.text = text
        self.saves = 0

    def load(self) -> str | None:
        return self.text

    def save(self, text: str) -> None:
        self.text = text
        self.saves += 1


def parse_counter(text: str | None) -> int:
    """Parse persisted counter text; anything unusable is 0."""
    if text is None:
        return 0
    value = text.strip()
    if not _COUNTER_RE.fullmatch(value):
        return 0
    return int(value)


class BuildCounter:
    def __init__(self, store: CounterStore) -> None:
        self._store = store

    @classmethod
    def at(cls, path: Path) -> BuildCounter:
        return cls(FileCounterStore(path))

    def current(self) -> int:
        return parse_counter(self._store.load())

    def next_build_number(self) -> int:
        """Increment, persist and return the build number.

        Raises:
            OSError: If the new value cannot be written.
        """
        n = self.current() + 1
        self._store.save(f"{n}\n")
        return n


def external_build_number(environ: Mapping[str, str] | None = None) -> int | None:
    """Return ``$BUILD_NUMBER`` when it holds a non-negative integer."""
    env = os.environ if environ is None else environ
    raw = env.get(BUILD_NUMBER_ENV, "").strip()
    if not _COUNTER_RE.fullmatch(raw):
        return None
    return int(raw)


def build_env(version: str, build_number: int) -> dict[str, str]:
    """Variables exported to the compiler for the ``--version`` banner."""
    return {
        BUILD_NUMBER_ENV: str(build_number),
        VERSION_BANNER_ENV: f"{version} (build {build_number})",
    }
