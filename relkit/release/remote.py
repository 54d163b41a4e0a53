"""Owner/repository coordinates from a git remote URL.

Accepted shapes (an optional ``.git`` suffix and trailing slash are ignored):

    git@github.com:owner/repo.git          scp-like SSH
    ssh://git@github.com:22/owner/repo     URL forms, with optional
    https://github.com/owner/repo          userinfo and port
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import ParseError

__all__ = ["RemoteCoordinates", "resolve"]

_SEGMENT = r"[^/\s:]+"
_TAIL = rf"(?P<owner>{_SEGMENT})/(?P<repo>{_SEGMENT}?)(?:\.git)?/?$"

_URL_RE = re.compile(
    rf"^(?:https?|ssh|git)://(?:[^@/\s]+@)?(?P<host>[^/:\s@]+)(?::\d+)?/{_TAIL}",
    re.IGNORECASE,
)
_SCP_RE = re.compile(rf"^(?:[^@/\s]+@)?(?P<host>[^/:\s@]+):{_TAIL}")


@dataclass(frozen=True, slots=True)
class RemoteCoordinates:
    host: str
    owner: str
    repository: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repository}"

    @property
    def homepage(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.repository}"


def resolve(remote_url: str) -> Result[RemoteCoordinates, ParseError]:
    """Extract coordinates; anything short of a full ``owner/repo`` is an error."""
    url = remote_url.strip()
    m = _URL_RE.match(url) or _SCP_RE.match(url)
    if m is None or not m.group("repo") or m.group("repo").startswith("."):
        return Err(
            ParseError(
                message=f"cannot parse remote URL: {remote_url}",
                url=remote_url,
                hint="Expected host[:/]owner/repository[.git]",
            )
        )
    return Ok(
        RemoteCoordinates(
            host=m.group("host").lower(),
            owner=m.group("owner"),
            repository=m.group("repo"),
        )
    )
