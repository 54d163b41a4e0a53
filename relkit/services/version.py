"""Manifest version commands: show, set and bump."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.config import Config
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.release.errors import InputError, ManifestError
from relkit.release.manifest import ManifestVersionStore
from relkit.release.semver import bump, parse_bump_kind, parse_version

VersionError = InputError | ManifestError


@dataclass(frozen=True, slots=True)
class VersionChange:
    previous: str
    current: str

    @property
    def changed(self) -> bool:
        return self.previous != self.current


class VersionService:
    def __init__(self, *, project: Project, config: Config) -> None:
        self._store = ManifestVersionStore(project.resolve(config.manifest.path))

    @property
    def manifest_path(self) -> Path:
        return self._store.path

    def show(self) -> Result[str, ManifestError]:
        return self._store.get_version()

    def set(self, version: str) -> Result[VersionChange, VersionError]:
        """Validate ``version`` and write it; nothing is touched on bad input."""
        parsed = parse_version(version)
        if isinstance(parsed, Err):
            return parsed

        previous = self._store.get_version()
        if isinstance(previous, Err):
            return previous
        return self._write(previous.value, str(parsed.value))

    def bump(self, kind: str) -> Result[VersionChange, VersionError]:
        parsed_kind = parse_bump_kind(kind)
        if isinstance(parsed_kind, Err):
            return parsed_kind

        previous = self._store.get_version()
        if isinstance(previous, Err):
            return previous

        current = parse_version(previous.value)
        if isinstance(current, Err):
            return Err(
                InputError(
                    message=f"manifest version is not semver: {previous.value!r}",
                    value=previous.value,
                    hint=str(self._store.path),
                )
            )
        return self._write(previous.value, str(bump(current.value, parsed_kind.value)))

    def _write(self, previous: str, new: str) -> Result[VersionChange, VersionError]:
        written = self._store.set_version(new)
        if isinstance(written, Err):
            return written
        return Ok(VersionChange(previous=previous, current=new))
