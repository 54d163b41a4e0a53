"""Tagged release archive download and checksum."""

from __future__ import annotations

import hashlib
import tempfile
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.http import HttpClient
from relkit.release.errors import FetchError
from relkit.release.remote import RemoteCoordinates

__all__ = ["ReleaseArchive", "ReleaseArchiveFetcher", "archive_url", "sha256_hex"]


@dataclass(frozen=True, slots=True)
class ReleaseArchive:
    url: str
    content: bytes
    sha256: str

    @property
    def size(self) -> int:
        return len(self.content)


def archive_url(coords: RemoteCoordinates, version: str) -> str:
    return (
        f"https://{coords.host}/{coords.owner}/{coords.repository}"
        f"/archive/refs/tags/v{version}.tar.gz"
    )


def sha256_hex(data: bytes) -> str:
    """Lowercase, 64-character hex SHA-256 of ``data``."""
    return hashlib.sha256(data).hexdigest()


class ReleaseArchiveFetcher:
    """Downloads ``v<version>.tar.gz`` for a repository and hashes it.

    The body lands in a private temporary directory that is removed before
    ``fetch`` returns, whatever the outcome. No retries are attempted.
    """

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def fetch(
        self,
        coords: RemoteCoordinates,
        version: str,
    ) -> Result[ReleaseArchive, FetchError]:
        url = archive_url(coords, version)
        with tempfile.TemporaryDirectory(prefix="relkit-") as tmp:
            dest = Path(tmp) / f"{coords.repository}-v{version}.tar.gz"
            result = self._http.download(url, dest)
            if isinstance(result, Err):
                e = result.error
                if e.is_transport:
                    return Err(
                        FetchError(
                            kind="unreachable",
                            message=f"could not reach {url}: {e.message}",
                            url=url,
                        )
                    )
                return Err(
                    FetchError(
                        kind="not_found",
                        message=f"release archive not available: {e}",
                        url=url,
                        status=e.status,
                        hint=f"Is tag v{version} pushed to {coords.slug}?",
                    )
                )

            try:
                content = dest.read_bytes()
            except OSError as e:
                return Err(
                    FetchError(kind="unreachable", message=f"download incomplete: {e}", url=url)
                )

        return Ok(ReleaseArchive(url=url, content=content, sha256=sha256_hex(content)))
