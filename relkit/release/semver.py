from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, get_args

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import InputError

BumpKind = Literal["patch", "minor", "major"]
BUMP_KINDS: tuple[BumpKind, ...] = get_args(BumpKind)

_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_NUM = r"0|[1-9]\d*"
_VERSION_RE = re.compile(
    rf"^(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<pre>{_IDENT}))?(?:\+(?P<build>{_IDENT}))?$"
)

_VERSION_HINT = "Expected MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD], e.g. 0.2.3"


@dataclass(frozen=True, slots=True)
class VersionRecord:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build_metadata: str | None = None

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"negative version component in {self.core}")

    @property
    def core(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, kind: BumpKind) -> VersionRecord:
        match kind:
            case "major":
                return VersionRecord(self.major + 1, 0, 0)
            case "minor":
                return VersionRecord(self.major, self.minor + 1, 0)
            case "patch":
                return VersionRecord(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def __str__(self) -> str:
        out = self.core
        if self.prerelease:
            out += f"-{self.prerelease}"
        if self.build_metadata:
            out += f"+{self.build_metadata}"
        return out


def parse_version(text: str) -> Result[VersionRecord, InputError]:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(
            InputError(message=f"invalid semver: {text!r}", value=text, hint=_VERSION_HINT)
        )
    return Ok(
        VersionRecord(
            int(m.group("major")),
            int(m.group("minor")),
            int(m.group("patch")),
            prerelease=m.group("pre"),
            build_metadata=m.group("build"),
        )
    )


def parse_bump_kind(text: str) -> Result[BumpKind, InputError]:
    value = text.strip().lower()
    for kind in BUMP_KINDS:
        if value == kind:
            return Ok(kind)
    return Err(
        InputError(
            message=f"invalid bump kind: {text!r}",
            value=text,
            hint=f"Use one of: {', '.join(BUMP_KINDS)}",
        )
    )


def bump(current: VersionRecord, kind: BumpKind) -> VersionRecord:
    """Return the next release version; prerelease and build suffixes are dropped."""
    return current.bump(kind)
