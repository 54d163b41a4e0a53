"""Release domain: versions, manifest editing, build numbers and formulae.

Components, leaves first:
- semver: parse versions and compute bumps
- manifest: read/rewrite the primary-section version field
- build_counter: persisted build number
- remote: owner/repository from a git remote URL
- archive: tagged archive download and SHA-256
- formula: Homebrew formula rendering
"""

from relkit.release.archive import ReleaseArchive, ReleaseArchiveFetcher, archive_url
from relkit.release.build_counter import BuildCounter, FileCounterStore, MemoryCounterStore
from relkit.release.errors import (
    BuildError,
    FetchError,
    InputError,
    ManifestError,
    OutputError,
    ParseError,
    ReleaseError,
)
from relkit.release.formula import ReleaseDescriptor, class_name, formula_path, render
from relkit.release.manifest import ManifestVersionStore
from relkit.release.remote import RemoteCoordinates, resolve
from relkit.release.semver import BumpKind, VersionRecord, bump, parse_bump_kind, parse_version

__all__ = [
    # archive
    "ReleaseArchive",
    "ReleaseArchiveFetcher",
    "archive_url",
    # build counter
    "BuildCounter",
    "FileCounterStore",
    "MemoryCounterStore",
    # errors
    "BuildError",
    "FetchError",
    "InputError",
    "ManifestError",
    "OutputError",
    "ParseError",
    "ReleaseError",
    # formula
    "ReleaseDescriptor",
    "class_name",
    "formula_path",
    "render",
    # manifest
    "ManifestVersionStore",
    # remote
    "RemoteCoordinates",
    "resolve",
    # semver
    "BumpKind",
    "VersionRecord",
    "bump",
    "parse_bump_kind",
    "parse_version",
]
