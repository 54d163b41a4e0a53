"""HTTP download abstraction.

This module provides:
- HttpClient: Protocol for downloads (injectable for tests)
- RealHttpClient: urllib-based implementation
- MockHttpClient: canned responses for testing
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from relkit import __version__
from relkit.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for transport errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    @property
    def is_transport(self) -> bool:
        """True when no HTTP response was received at all."""
        return self.status == 0

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Download ``url`` into ``dest``.

        Returns:
            Ok with dest, or Err with HttpError (``dest`` may hold a partial body)
        """
        ...


class RealHttpClient:
    """HTTP client on urllib with system certificates and a request timeout.

    Redirects are followed (GitHub serves tag archives from codeload); a final
    non-2xx status is reported with its code.
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = f"relkit/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    return Err(HttpError(url=url, status=status, message="unexpected status"))

                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    while True:
                        chunk = response.read(_CHUNK_SIZE)
                        if not chunk:
                            break
                        f.write(chunk)
                return Ok(dest)

        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_download("https://example.com/a.tar.gz", b"payload")
        client.download("https://example.com/a.tar.gz", tmp_path / "a")

    Unknown URLs answer 404. ``destinations`` records where each download
    was written, so tests can check temp files were cleaned up.
    """

    def __init__(self) -> None:
        self._responses: dict[str, bytes | HttpError] = {}
        self.calls: list[str] = []
        self.destinations: list[Path] = []

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._responses[url] = response

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        self.calls.append(url)
        self.destinations.append(dest)

        if url not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        return Ok(dest)
