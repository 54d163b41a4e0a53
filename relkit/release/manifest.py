"""Version field editing for the package manifest.

The manifest is edited as text so that comments, spacing, key order and line
endings survive untouched. Only the ``version = "..."`` line of the *primary
section* is considered: the first ``[table]`` header in the file, up to the
next header of any kind. A look-alike field under ``[dependencies.foo]`` or
``[package.metadata]`` is therefore never matched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.files import atomic_write_text, read_text_exact
from relkit.release.errors import ManifestError

__all__ = [
    "ManifestVersionStore",
    "VersionField",
    "find_primary_version",
]

_HEADER_RE = re.compile(r"^[ \t]*\[")
_TABLE_RE = re.compile(r"^[ \t]*\[(?!\[)")
_VERSION_LINE_RE = re.compile(r'^[ \t]*version[ \t]*=[ \t]*"(?P<value>[^"\r\n]*)"')


@dataclass(frozen=True, slots=True)
class VersionField:
    """Location of the primary version value inside the manifest text.

    ``start``/``end`` delimit the value between the quotes.
    """

    section: str
    value: str
    start: int
    end: int


def _open_string_after(line: str, delim: str | None) -> str | None:
    """Return the multi-line string delimiter still open at the end of ``line``.

    ``delim`` is the delimiter open at the start of the line, if any.
    """
    i = 0
    n = len(line)
    while i < n:
        if delim is not None:
            if delim == '"""' and line[i] == "\\":
                i += 2
                continue
            if line.startswith(delim, i):
                i += 3
                # Quotes adjacent to the closing delimiter are string content.
                while i < n and line[i] == delim[0]:
                    i += 1
                delim = None
                continue
            i += 1
            continue
        ch = line[i]
        if ch == "#":
            break
        if line.startswith('"""', i) or line.startswith("'''", i):
            delim = line[i : i + 3]
            i += 3
            continue
        if ch == '"':
            i += 1
            while i < n and line[i] not in '"\r\n':
                i += 2 if line[i] == "\\" else 1
            i += 1
            continue
        if ch == "'":
            end = line.find("'", i + 1)
            i = n if end == -1 else end + 1
            continue
        i += 1
    return delim


def find_primary_version(text: str) -> VersionField | None:
    offset = 0
    section: str | None = None
    in_string: str | None = None
    for line in text.splitlines(keepends=True):
        if in_string is None:
            if section is None:
                if _TABLE_RE.match(line):
                    section = line.strip()
            elif _HEADER_RE.match(line):
                return None
            else:
                m = _VERSION_LINE_RE.match(line)
                if m is not None:
                    return VersionField(
                        section=section,
                        value=m.group("value"),
                        start=offset + m.start("value"),
                        end=offset + m.end("value"),
                    )
        in_string = _open_string_after(line, in_string)
        offset += len(line)
    return None


class ManifestVersionStore:
    """Reads and atomically rewrites the version of the manifest at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_version(self) -> Result[str, ManifestError]:
        text = self._read()
        if isinstance(text, Err):
            return text
        found = find_primary_version(text.value)
        if found is None:
            return Err(self._not_found())
        return Ok(found.value)

    def set_version(self, version: str) -> Result[bool, ManifestError]:
        """Set the primary version.

        Returns:
            Ok(True) if the file was rewritten, Ok(False) if it already held
            ``version`` (no write happens), or Err(ManifestError).
        """
        text = self._read()
        if isinstance(text, Err):
            return text

        found = find_primary_version(text.value)
        if found is None:
            return Err(self._not_found())
        if found.value == version:
            return Ok(False)

        out = text.value[: found.start] + version + text.value[found.end :]
        try:
            atomic_write_text(self.path, out, encoding="utf-8")
        except OSError as e:
            return Err(
                ManifestError(
                    kind="io_failure",
                    message=f"failed to write {self.path.name}: {e}",
                    path=self.path,
                )
            )
        return Ok(True)

    def _read(self) -> Result[str, ManifestError]:
        try:
            return Ok(read_text_exact(self.path, encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ManifestError(
                    kind="io_failure",
                    message=f"failed to read {self.path.name}: {e}",
                    path=self.path,
                )
            )

    def _not_found(self) -> ManifestError:
        return ManifestError(
            kind="not_found",
            message=f"no version field in the primary section of {self.path.name}",
            path=self.path,
            hint='Expected a line like: version = "0.1.0" under the first [section]',
        )
